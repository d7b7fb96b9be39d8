# src/javafetch/cli.py

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from javafetch import log_utils
from javafetch.config_utils import load_config
from javafetch.environment import apply_installation
from javafetch.exceptions import ConfigurationError, JavafetchError
from javafetch.install.cache import ToolCache
from javafetch.install.installer import Installer
from javafetch.install.interfaces import InstallerOptions
from javafetch.install.version import normalize_version
from javafetch.platforms import detect_host


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="javafetch",
        description="javafetch - resolve, download and cache Java runtimes",
    )
    parser.add_argument(
        "--log-level",
        help="Console log level (DEBUG, INFO, WARNING, ERROR)",
    )
    parser.add_argument(
        "--log-dir",
        help="Also write a rotating log file into this directory",
    )
    subparsers = parser.add_subparsers(dest="command")

    install_parser = subparsers.add_parser(
        "install", help="Install a Java runtime and export it to the environment"
    )
    install_parser.add_argument(
        "version", help="Java version, e.g. '11', '1.8', '11.0.2' or '16-ea'"
    )
    install_parser.add_argument(
        "--distributor", "-d", help="Distributor: adopt or zulu"
    )
    install_parser.add_argument(
        "--java-package", "-p", help="Package type: jdk or jre"
    )
    install_parser.add_argument(
        "--architecture", "-a", help="Architecture, e.g. x64 or aarch64"
    )
    install_parser.add_argument("--config", help="Path to a javafetch.yaml file")

    normalize_parser = subparsers.add_parser(
        "normalize", help="Print the semver range a version string resolves to"
    )
    normalize_parser.add_argument("version")

    return parser


def run_install(args: argparse.Namespace) -> int:
    config = load_config(args.config)
    host = detect_host(args.architecture or config.get("ARCHITECTURE"))
    options = InstallerOptions(
        version=args.version,
        architecture=host.arch,
        package_type=args.java_package or config["JAVA_PACKAGE"],
        distributor=args.distributor or config["DISTRIBUTOR"],
    )
    installer = Installer(
        options,
        host,
        ToolCache(config["TOOL_CACHE_DIR"]),
        temp_dir=config["TEMP_DIR"],
    )
    result = installer.install()
    try:
        apply_installation(result)
    except OSError as e:
        raise ConfigurationError(
            f"Failed to export Java {result.installed_version} to the environment",
            details=str(e),
        ) from e
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point for the javafetch command-line interface.

    Dispatches the `install` and `normalize` subcommands. javafetch errors are logged and
    turned into exit status 1.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.log_level:
        log_utils.set_log_level(args.log_level)
    if args.log_dir:
        log_utils.add_file_logging(Path(args.log_dir), args.log_level or "INFO")

    if args.command is None:
        parser.print_help()
        return 0

    try:
        if args.command == "install":
            return run_install(args)
        if args.command == "normalize":
            print(normalize_version(args.version))
            return 0
    except JavafetchError as e:
        log_utils.logger.error(str(e))
        return 1

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
