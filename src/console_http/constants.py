"""
Application-wide constants for console-http.

Header names, wire-level defaults and configuration bounds shared by the
clients, the configuration layer and the CLI.
"""

# Headers injected into every outgoing request
REMEMBER_ME_TOKEN_HEADER = "remember-me-token"
BROWSER_FINGERPRINT_HEADER = "browser-fingerprint"
ADMIN_HEADER = "admin-header"

# Static admin-access header value shipped with the console
DEFAULT_ADMIN_HEADER_VALUE = ";laskfqwperqw1234214cfascae09-_ad-"

# Network constants (milliseconds)
DEFAULT_TIMEOUT_MS = 10000
MAX_TIMEOUT_MS = 600000
MS_PER_SECOND = 1000

# Retry constants
DEFAULT_RETRY_DELAY_MS = 1
DEFAULT_RETRY_MULTIPLIER = 1.0
MAX_RETRY_ATTEMPTS = 10

# Connection pool sizing for the blocking client
DEFAULT_POOL_CONNECTIONS = 10
DEFAULT_POOL_MAXSIZE = 10

# Response body contract
SUCCESS_FIELD = "success"
DATA_FIELD = "data"
ERROR_FIELD = "error"

# Logging constants
DEFAULT_LOG_FILE_SIZE_BYTES = 10 * 1024 * 1024
DEFAULT_LOG_BACKUP_COUNT = 5
DEFAULT_LOG_FILE = "logs/console-http.log"

# Environment
ENV_PREFIX = "CONSOLE_HTTP_"
CONFIG_DIR_NAME = "console-http"
CONFIG_FILE_NAME = "config.toml"
