"""
Constants and configuration values for javafetch.

This module contains all hardcoded values, URLs, timeouts, and other constants
used throughout the application.
"""

# Vendor catalog URLs
ADOPT_API_BASE = "https://api.adoptopenjdk.net/v3"
ADOPT_AVAILABLE_RELEASES_URL = f"{ADOPT_API_BASE}/info/available_releases"
ADOPT_ASSETS_VERSION_URL = f"{ADOPT_API_BASE}/assets/version"
ADOPT_FULL_VERSION_RANGE = "[1.0,100.0]"
ADOPT_PAGE_SIZE = 20

ZULU_API_BASE = "https://api.azul.com/zulu/download/community/v1.0"
ZULU_BUNDLES_URL = f"{ZULU_API_BASE}/bundles/"
ZULU_LATEST_BUNDLE_URL = f"{ZULU_API_BASE}/bundles/latest/"

# Distributor identifiers and display names
DISTRIBUTOR_ADOPT = "adopt"
DISTRIBUTOR_ZULU = "zulu"
DISTRIBUTOR_ALIASES = {
    "adoptopenjdk": DISTRIBUTOR_ADOPT,
}
ADOPT_DISPLAY_NAME = "AdoptOpenJDK"
ZULU_DISPLAY_NAME = "Azul Systems, Inc."

SUPPORTED_PACKAGE_TYPES = ("jdk", "jre")
DEFAULT_PACKAGE_TYPE = "jdk"
DEFAULT_DISTRIBUTOR = DISTRIBUTOR_ADOPT

TOOL_FAMILY = "Java"
MACOS_JAVA_CONTENT_DIR = "Contents/Home"
COMPLETE_MARKER_SUFFIX = ".complete"

# Network timeouts and retry settings (in seconds)
DEFAULT_CONNECT_RETRIES = 3
DEFAULT_BACKOFF_FACTOR = 0.3
DEFAULT_REQUEST_TIMEOUT = 30
DEFAULT_CHUNK_SIZE = 8192
RETRY_STATUS_FORCELIST = (408, 429, 500, 502, 503, 504)

# Archive handling
ZIP_EXTENSION = "zip"
TAR_GZ_EXTENSION = "tar.gz"

# Logging configuration
LOGGER_NAME = "javafetch"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
INFO_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
DEBUG_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s: %(message)s"
LOG_FILE_NAME = "javafetch.log"
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
LOG_FILE_BACKUP_COUNT = 5

# Configuration file names
APP_NAME = "javafetch"
CONFIG_FILE_NAME = "javafetch.yaml"
TOOL_CACHE_DIR_NAME = "tool-cache"

# Environment variable names
LOG_LEVEL_ENV_VAR = "JAVAFETCH_LOG_LEVEL"
TOOL_CACHE_ENV_VARS = ("JAVAFETCH_TOOL_CACHE", "RUNNER_TOOL_CACHE")
TEMP_DIR_ENV_VARS = ("JAVAFETCH_TEMP", "RUNNER_TEMP")
CI_ENV_FILE_VAR = "GITHUB_ENV"
CI_PATH_FILE_VAR = "GITHUB_PATH"
CI_OUTPUT_FILE_VAR = "GITHUB_OUTPUT"
JAVA_HOME_ENV_VAR = "JAVA_HOME"
