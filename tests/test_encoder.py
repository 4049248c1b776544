from datetime import datetime, timedelta, timezone

import pytest

from logproxy.encoder import ANSI_FG_BLUE, ANSI_FG_GREEN, ANSI_FG_MAGENTA
from logproxy.encoder import ANSI_FG_RED, ANSI_FG_YELLOW, LEVEL_COLOURS
from logproxy.encoder import get_day_millis, output_ansi_colour, output_level
from logproxy.encoder import output_level5, output_level5_coloured
from logproxy.encoder import output_level_coloured, output_name_with_limit
from logproxy.encoder import output_time
from logproxy.exceptions import ConfigurationError
from logproxy.levels import Level, is_enabled_at


def render(fn, *args):
    parts = []
    fn(*args, parts.append)
    return ''.join(parts)


#
# Level tests
#


class TestLevel:

    def test_declaration_order(self):
        """Test levels are ordered TRACE < DEBUG < INFO < WARN < ERROR."""
        assert list(Level) == [Level.TRACE, Level.DEBUG, Level.INFO, Level.WARN, Level.ERROR]
        assert Level.TRACE < Level.DEBUG < Level.INFO < Level.WARN < Level.ERROR

    def test_rank(self):
        """Test rank follows declaration order."""
        assert [level.rank for level in Level] == [0, 1, 2, 3, 4]

    @pytest.mark.parametrize('threshold', list(Level))
    def test_is_enabled_at(self, threshold):
        """Test a level is enabled only at or above the threshold."""
        for level in Level:
            assert is_enabled_at(threshold, level) == (level >= threshold)

    def test_parse(self):
        """Test parse is case-insensitive."""
        assert Level.parse('debug') is Level.DEBUG
        assert Level.parse(' ERROR ') is Level.ERROR

    def test_parse_warning_alias(self):
        """Test WARNING is accepted for WARN."""
        assert Level.parse('warning') is Level.WARN

    def test_parse_unknown_raises(self):
        """Test an unknown name raises ConfigurationError."""
        with pytest.raises(ConfigurationError, match='VERBOSE'):
            Level.parse('VERBOSE')

    def test_str_is_name(self):
        """Test str() gives the level name."""
        assert str(Level.WARN) == 'WARN'


#
# Time tests
#


class TestTime:

    def test_output_time(self):
        """Test time renders as zero-padded hh:mm:ss.mmm."""
        day_millis = ((14 * 60 + 43) * 60 + 24) * 1000
        assert render(output_time, day_millis) == '14:43:24.000'

    def test_output_time_padding(self):
        """Test small values are zero padded."""
        assert render(output_time, 3_723_004) == '01:02:03.004'

    def test_output_time_midnight(self):
        """Test zero renders as midnight."""
        assert render(output_time, 0) == '00:00:00.000'

    def test_output_time_last_millisecond(self):
        """Test the last millisecond of the day."""
        assert render(output_time, 86_399_999) == '23:59:59.999'

    def test_get_day_millis(self):
        """Test day millis are read from the datetime fields."""
        time = datetime(2026, 10, 19, 22, 41, 3, 456_789, tzinfo=timezone.utc)
        assert get_day_millis(time) == ((22 * 60 + 41) * 60 + 3) * 1000 + 456

    def test_get_day_millis_with_zone(self):
        """Test a zone converts the time first."""
        time = datetime(2026, 10, 19, 22, 41, 3, tzinfo=timezone.utc)
        zone = timezone(timedelta(hours=10))
        assert get_day_millis(time, zone) == ((8 * 60 + 41) * 60 + 3) * 1000


#
# Level encoding tests
#


class TestLevelEncoding:

    def test_colour_codes(self):
        """Test each level's SGR colour code."""
        assert LEVEL_COLOURS[Level.TRACE] == ANSI_FG_MAGENTA == 35
        assert LEVEL_COLOURS[Level.DEBUG] == ANSI_FG_BLUE == 34
        assert LEVEL_COLOURS[Level.INFO] == ANSI_FG_GREEN == 32
        assert LEVEL_COLOURS[Level.WARN] == ANSI_FG_YELLOW == 33
        assert LEVEL_COLOURS[Level.ERROR] == ANSI_FG_RED == 31

    def test_output_ansi_colour(self):
        """Test SGR escape sequence format."""
        assert render(output_ansi_colour, 32) == '\x1b[32m'
        assert render(output_ansi_colour, 0) == '\x1b[0m'

    def test_output_level(self):
        """Test plain level name."""
        assert render(output_level, Level.INFO) == 'INFO'

    def test_output_level_coloured(self):
        """Test coloured level without padding."""
        assert render(output_level_coloured, Level.WARN) == '\x1b[33mWARN\x1b[0m'

    @pytest.mark.parametrize('level', list(Level))
    def test_output_level5_width(self, level):
        """Test padded level is always 5 characters."""
        assert len(render(output_level5, level)) == 5

    def test_output_level5_padding(self):
        """Test INFO and WARN get one trailing space."""
        assert render(output_level5, Level.INFO) == 'INFO '
        assert render(output_level5, Level.WARN) == 'WARN '
        assert render(output_level5, Level.ERROR) == 'ERROR'

    def test_output_level5_coloured(self):
        """Test padding sits inside the colour."""
        assert render(output_level5_coloured, Level.INFO) == '\x1b[32mINFO \x1b[0m'
        assert render(output_level5_coloured, Level.TRACE) == '\x1b[35mTRACE\x1b[0m'


#
# Name encoding tests
#


class TestNameEncoding:

    def test_short_name_unchanged(self):
        """Test a name within the limit is written as is."""
        assert render(output_name_with_limit, 40, 'short.name') == 'short.name'

    def test_name_at_limit_unchanged(self):
        """Test a name exactly at the limit is written as is."""
        assert render(output_name_with_limit, 8, 'abcdefgh') == 'abcdefgh'

    def test_long_name_truncated(self):
        """Test a 50-character name with limit 12 keeps its last 9 characters."""
        name = 'abcdefghijklmnopqrstuvwxyz0123456789ABCDEFGHIJKLMN'
        assert len(name) == 50
        result = render(output_name_with_limit, 12, name)
        assert result == '...FGHIJKLMN'
        assert len(result) == 12

    @pytest.mark.parametrize('limit, expected', [(3, '...'), (2, 'yz'), (1, 'z'), (0, '')])
    def test_tiny_limit_never_exceeded(self, limit, expected):
        """Test output stays within limits too small for the ellipsis."""
        assert render(output_name_with_limit, limit, 'abcdefghijklmnopqrstuvwxyz') == expected


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
