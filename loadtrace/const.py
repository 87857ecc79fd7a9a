"""Constants for loadtrace."""

# Default run parameters
DEFAULT_CONCURRENCY = 1
DEFAULT_REQUESTS = 1
DEFAULT_REQUEST_TIMEOUT = 5.0  # seconds
DEFAULT_MAX_CONNECTIONS = 300
DEFAULT_MAX_KEEPALIVE_CONNECTIONS = 300
DEFAULT_TCP_OUTLIER_THRESHOLD_MS = 1000.0
DEFAULT_PROGRESS_LOG_STEP = 10  # percent

# Logging configuration
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Library log levels
LIBRARY_LOG_LEVELS = {
    "httpx": "WARNING",
    "httpcore": "WARNING",
}

# Configuration file
CONFIG_FILE_NAME = "loadtrace.json"
ENV_PREFIX = "LOADTRACE_"

# HTTP
HTTP_SCHEME = "http"
HTTPS_SCHEME = "https"
NO_RESPONSE_STATUS = 0
