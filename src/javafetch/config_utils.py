"""
Configuration loading for javafetch.

Settings come from an optional YAML file and are overridden by environment variables,
so a CI runner's RUNNER_TOOL_CACHE / RUNNER_TEMP take effect without a config file.
"""

import os
import tempfile
from typing import Any, Dict, Optional

import platformdirs
import yaml

from javafetch.constants import (
    APP_NAME,
    CONFIG_FILE_NAME,
    DEFAULT_DISTRIBUTOR,
    DEFAULT_PACKAGE_TYPE,
    TEMP_DIR_ENV_VARS,
    TOOL_CACHE_DIR_NAME,
    TOOL_CACHE_ENV_VARS,
)
from javafetch.exceptions import ConfigurationError
from javafetch.log_utils import logger

CONFIG_DIR = platformdirs.user_config_dir(APP_NAME)
CONFIG_FILE = os.path.join(CONFIG_DIR, CONFIG_FILE_NAME)

KNOWN_KEYS = (
    "TOOL_CACHE_DIR",
    "TEMP_DIR",
    "DISTRIBUTOR",
    "JAVA_PACKAGE",
    "ARCHITECTURE",
)


def default_config() -> Dict[str, Any]:
    return {
        "TOOL_CACHE_DIR": os.path.join(
            platformdirs.user_cache_dir(APP_NAME), TOOL_CACHE_DIR_NAME
        ),
        "TEMP_DIR": tempfile.gettempdir(),
        "DISTRIBUTOR": DEFAULT_DISTRIBUTOR,
        "JAVA_PACKAGE": DEFAULT_PACKAGE_TYPE,
        "ARCHITECTURE": None,
    }


def _first_env(names, environ) -> Optional[str]:
    for name in names:
        value = environ.get(name)
        if value:
            return value
    return None


def read_config_file(config_path: str) -> Dict[str, Any]:
    """
    Parse a YAML configuration file.

    Returns:
        Dict[str, Any]: The mapping stored in the file; empty for an empty file.

    Raises:
        ConfigurationError: When the file cannot be read or is not a YAML mapping.
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(
            f"Failed to load configuration from {config_path}", details=str(e)
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Configuration in {config_path} must be a mapping",
            details=f"got {type(data).__name__}",
        )
    return data


def load_config(
    config_path: Optional[str] = None,
    environ: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    """
    Build the effective configuration.

    Precedence, lowest first: built-in defaults, the YAML file (`config_path`, or the
    platformdirs location when it exists), then environment variables for the tool
    cache and temp directories.

    Raises:
        ConfigurationError: When an explicitly given file is missing or invalid.
    """
    environ = dict(os.environ) if environ is None else environ
    config = default_config()

    if config_path:
        if not os.path.exists(config_path):
            raise ConfigurationError(f"Configuration file {config_path} not found")
        path_to_read: Optional[str] = config_path
    elif os.path.exists(CONFIG_FILE):
        path_to_read = CONFIG_FILE
    else:
        path_to_read = None

    if path_to_read:
        file_config = read_config_file(path_to_read)
        for key, value in file_config.items():
            normalized = str(key).upper()
            if normalized not in KNOWN_KEYS:
                logger.warning(f"Ignoring unknown configuration key '{key}'")
                continue
            config[normalized] = value
        logger.debug(f"Loaded configuration from {path_to_read}")

    tool_cache = _first_env(TOOL_CACHE_ENV_VARS, environ)
    if tool_cache:
        config["TOOL_CACHE_DIR"] = tool_cache
    temp_dir = _first_env(TEMP_DIR_ENV_VARS, environ)
    if temp_dir:
        config["TEMP_DIR"] = temp_dir

    config["TOOL_CACHE_DIR"] = os.path.expanduser(str(config["TOOL_CACHE_DIR"]))
    config["TEMP_DIR"] = os.path.expanduser(str(config["TEMP_DIR"]))
    return config
