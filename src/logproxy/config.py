import os

from libb import Setting, expandabspath

Setting.unlock()

# Facade defaults
log = Setting()
log.level = os.getenv('CONFIG_LOG_LEVEL')
log.factory = os.getenv('CONFIG_LOG_FACTORY')
log.config_file = None
if os.getenv('CONFIG_LOG_CONFIG_FILE'):
    log.config_file = expandabspath(os.getenv('CONFIG_LOG_CONFIG_FILE'))

# Console output
console = Setting()
console.separator = os.getenv('CONFIG_LOG_SEPARATOR', '|')
console.name_limit = int(os.getenv('CONFIG_LOG_NAME_LIMIT', 0)) or 40

Setting.lock()
