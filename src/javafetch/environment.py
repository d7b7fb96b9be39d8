"""
Environment export for a finished installation.

Runs after the Installer has returned: sets JAVA_HOME, puts the runtime's `bin` first on
PATH and publishes the `path` and `version` outputs. Inside a CI runner that provides
env/path/output files the values are appended to those files; otherwise the current
process environment is updated.
"""

import os
import uuid
from typing import Mapping, MutableMapping, Optional

from javafetch.constants import (
    CI_ENV_FILE_VAR,
    CI_OUTPUT_FILE_VAR,
    CI_PATH_FILE_VAR,
    JAVA_HOME_ENV_VAR,
)
from javafetch.install.interfaces import InstallationResult
from javafetch.log_utils import logger


def _append_command_file(file_path: str, name: str, value: str) -> None:
    # Multiline-safe `name<<delimiter` form accepted by runner command files
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    with open(file_path, "a", encoding="utf-8") as f:
        f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")


def export_variable(
    name: str, value: str, environ: Optional[MutableMapping[str, str]] = None
) -> None:
    environ = os.environ if environ is None else environ
    environ[name] = value
    env_file = environ.get(CI_ENV_FILE_VAR)
    if env_file:
        _append_command_file(env_file, name, value)


def add_path(
    directory: str, environ: Optional[MutableMapping[str, str]] = None
) -> None:
    environ = os.environ if environ is None else environ
    path_file = environ.get(CI_PATH_FILE_VAR)
    if path_file:
        with open(path_file, "a", encoding="utf-8") as f:
            f.write(f"{directory}\n")
    current = environ.get("PATH", "")
    environ["PATH"] = f"{directory}{os.pathsep}{current}" if current else directory


def set_output(
    name: str, value: str, environ: Optional[Mapping[str, str]] = None
) -> None:
    environ = os.environ if environ is None else environ
    output_file = environ.get(CI_OUTPUT_FILE_VAR)
    if output_file:
        _append_command_file(output_file, name, value)
    else:
        logger.info(f"{name}={value}")


def apply_installation(
    result: InstallationResult, environ: Optional[MutableMapping[str, str]] = None
) -> None:
    """Publish an installation to the invoking environment."""
    export_variable(JAVA_HOME_ENV_VAR, result.install_path, environ)
    add_path(os.path.join(result.install_path, "bin"), environ)
    set_output("path", result.install_path, environ)
    set_output("version", result.installed_version, environ)
    logger.info(
        f"Java {result.installed_version} is set up at {result.install_path}"
    )
