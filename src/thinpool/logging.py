"""
Logging functionality for the thin-pool configuration loader.

This module provides centralized logging configuration and utilities
for consistent logging of configuration loading and validation.
"""

import logging
import sys
from typing import Iterable


class ThinPoolLogger:
    """
    Custom logger for thin-pool configuration operations.

    This class provides one logging method per configuration event so
    callers and tests agree on the exact wording of each message.
    """

    def __init__(
        self, name: str = "thinpool", verbose: bool = False, configure: bool = True
    ):
        """Initialize the logger.

        Args:
            name: Name of the logger
            verbose: Enable verbose logging mode
            configure: Install level and handler on the named logger
        """
        self.logger = logging.getLogger(name)
        self.verbose = verbose

        if configure:
            self._configure_logging()

    def _configure_logging(self) -> None:
        """Configure logging format and handlers."""
        # Clear any existing handlers to avoid duplicate logs
        self.logger.handlers.clear()

        log_level = logging.DEBUG if self.verbose else logging.INFO
        self.logger.setLevel(log_level)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(logging.Formatter("%(message)s"))

        self.logger.addHandler(console_handler)

    def log_config_loading(self, path: str) -> None:
        """Log the start of a configuration load.

        Args:
            path: Path to the configuration file
        """
        self.logger.debug(f"Loading config: {path}")

    def log_config_loaded(self, path: str, pool_name: str) -> None:
        """Log a successfully loaded configuration.

        Args:
            path: Path to the configuration file
            pool_name: Name of the configured pool
        """
        self.logger.debug(f"Loaded config: {path} (pool: {pool_name})")

    def log_decode_failed(self, path: str, error: str) -> None:
        """Log a configuration file that could not be decoded.

        Args:
            path: Path to the configuration file
            error: Error message
        """
        self.logger.error(f"Config decode failed: {path}: {error}")

    def log_unknown_keys(self, path: str, keys: Iterable[str]) -> None:
        """Log keys present in the file that the loader does not know.

        Args:
            path: Path to the configuration file
            keys: Unrecognized keys
        """
        self.logger.warning(
            f"Ignoring unknown config keys in {path}: {', '.join(keys)}"
        )

    def log_parse_failed(self, error_count: int) -> None:
        """Log failed size parsing.

        Args:
            error_count: Number of fields that failed to parse
        """
        self.logger.error(f"Config parse failed: {error_count} invalid size field(s)")

    def log_pool_mode(self, pool_name: str, mode: str) -> None:
        """Log which pool mode a configuration selects.

        Args:
            pool_name: Name of the configured pool
            mode: Pool mode value
        """
        if mode == "existing":
            self.logger.info(
                f"Pool mode: reusing existing thin-pool '{pool_name}' "
                f"(no data/metadata devices configured)"
            )
        else:
            self.logger.debug(f"Pool mode: creating thin-pool '{pool_name}'")

    def log_validation_passed(self, pool_name: str) -> None:
        """Log a configuration that passed every check.

        Args:
            pool_name: Name of the configured pool
        """
        self.logger.debug(f"Validation passed: {pool_name}")

    def log_validation_failed(self, error_count: int) -> None:
        """Log a configuration that failed validation.

        Args:
            error_count: Number of violated checks
        """
        self.logger.warning(f"Validation failed: {error_count} error(s)")


def get_logger(verbose: bool = False) -> ThinPoolLogger:
    """Get a configured logger instance.

    Args:
        verbose: Enable verbose logging mode

    Returns:
        Configured ThinPoolLogger instance
    """
    return ThinPoolLogger(verbose=verbose)


def get_library_logger() -> ThinPoolLogger:
    """Get a logger that leaves level and handlers to the application.

    Returns:
        ThinPoolLogger over the shared "thinpool" logger, unconfigured
    """
    return ThinPoolLogger(configure=False)
