"""
Command-line interface for the thin-pool configuration checker.

This module handles argument parsing and provides the main entry point
for checking a thin-pool configuration file before it is deployed.
"""

import argparse
import sys

from .config import PoolConfig, load_config
from .errors import ConfigDecodeError, MultiError
from .logging import ThinPoolLogger, get_logger
from .version import get_version


def parse_args() -> argparse.Namespace:
    """Parse command line arguments with subcommands."""
    parser = argparse.ArgumentParser(
        description="Device-mapper thin-pool configuration checker",
    )

    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )
    parser.add_argument("--version", action="version", version=get_version())

    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser(
        "check", help="Load and validate a thin-pool config file", aliases=["c"]
    )
    check_parser.add_argument("config", help="Path to the TOML config file")

    return parser.parse_args()


def report_config(config: PoolConfig, logger: ThinPoolLogger) -> None:
    """Print the resolved values of a valid configuration."""
    logger.logger.info(f"Config OK: pool '{config.pool_name}' ({config.mode.value})")
    logger.logger.info(f"  root_path: {config.root_path}")
    if config.data_device or config.metadata_device:
        logger.logger.info(f"  data_device: {config.data_device}")
        logger.logger.info(f"  meta_device: {config.metadata_device}")
    if config.data_block_size:
        logger.logger.info(
            f"  data_block_size: {config.data_block_size} "
            f"({config.data_block_size_sectors} sectors)"
        )
    logger.logger.info(
        f"  base_image_size: {config.base_image_size} "
        f"({config.base_image_size_bytes} bytes)"
    )


def report_errors(errors: MultiError, logger: ThinPoolLogger) -> None:
    """Print every individual error of an aggregated failure."""
    for error in errors:
        logger.logger.error(f"  - {error}")


def handle_check_operation(path: str, logger: ThinPoolLogger) -> None:
    """Handle the check operation."""
    try:
        config = load_config(path, logger)
    except FileNotFoundError:
        logger.logger.error(f"Config file not found: {path}")
        sys.exit(1)
    except ConfigDecodeError as e:
        logger.logger.error(str(e))
        sys.exit(1)
    except MultiError as e:
        logger.logger.error(f"Config parse failed: {path}")
        report_errors(e, logger)
        sys.exit(1)

    try:
        config.validate(logger)
    except MultiError as e:
        logger.logger.error(f"Config validation failed: {path}")
        report_errors(e, logger)
        sys.exit(1)

    report_config(config, logger)


def main() -> None:
    """Main entry point for the CLI."""
    args = parse_args()
    logger = get_logger(args.verbose)

    try:
        if args.command in ("check", "c"):
            handle_check_operation(args.config, logger)
        else:
            logger.logger.error(f"Unknown command: {args.command}")
            sys.exit(1)
    except KeyboardInterrupt:
        logger.logger.info("Operation cancelled by user")
        sys.exit(1)
    except OSError as e:
        logger.logger.error(f"Could not read config: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
