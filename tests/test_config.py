import importlib
import os
from unittest.mock import patch

import pytest

import logproxy.config


@pytest.fixture(autouse=True)
def restore_config():
    yield
    importlib.reload(logproxy.config)


def reload_with(env, clear=()):
    with patch.dict(os.environ, env):
        for key in clear:
            os.environ.pop(key, None)
        importlib.reload(logproxy.config)
    return logproxy.config


#
# log configuration tests
#


class TestLogConfig:

    def test_level_from_environment(self):
        """Test level from CONFIG_LOG_LEVEL."""
        config = reload_with({'CONFIG_LOG_LEVEL': 'debug'})
        assert config.log.level == 'debug'

    def test_level_none_when_not_set(self):
        """Test level is None when not set."""
        config = reload_with({}, clear=('CONFIG_LOG_LEVEL',))
        assert config.log.level is None

    def test_factory_from_environment(self):
        """Test factory class path from CONFIG_LOG_FACTORY."""
        config = reload_with({'CONFIG_LOG_FACTORY': 'logproxy.ConsoleLoggerFactory'})
        assert config.log.factory == 'logproxy.ConsoleLoggerFactory'

    def test_factory_none_when_not_set(self):
        """Test factory is None when not set."""
        config = reload_with({}, clear=('CONFIG_LOG_FACTORY',))
        assert config.log.factory is None

    def test_config_file_from_environment(self, tmp_path):
        """Test config file path from CONFIG_LOG_CONFIG_FILE."""
        path = tmp_path / 'logging.ini'
        config = reload_with({'CONFIG_LOG_CONFIG_FILE': str(path)})
        assert 'logging.ini' in str(config.log.config_file)

    def test_config_file_none_when_not_set(self):
        """Test config file is None when not set."""
        config = reload_with({}, clear=('CONFIG_LOG_CONFIG_FILE',))
        assert config.log.config_file is None


#
# console configuration tests
#


class TestConsoleConfig:

    def test_separator_default(self):
        """Test separator defaults to a pipe."""
        config = reload_with({}, clear=('CONFIG_LOG_SEPARATOR',))
        assert config.console.separator == '|'

    def test_separator_from_environment(self):
        """Test separator from CONFIG_LOG_SEPARATOR."""
        config = reload_with({'CONFIG_LOG_SEPARATOR': ' '})
        assert config.console.separator == ' '

    def test_name_limit_default(self):
        """Test name limit defaults to 40."""
        config = reload_with({}, clear=('CONFIG_LOG_NAME_LIMIT',))
        assert config.console.name_limit == 40

    def test_name_limit_from_environment(self):
        """Test name limit from CONFIG_LOG_NAME_LIMIT."""
        config = reload_with({'CONFIG_LOG_NAME_LIMIT': '20'})
        assert config.console.name_limit == 20

    def test_name_limit_zero_uses_default(self):
        """Test a zero name limit falls back to the default."""
        config = reload_with({'CONFIG_LOG_NAME_LIMIT': '0'})
        assert config.console.name_limit == 40


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
