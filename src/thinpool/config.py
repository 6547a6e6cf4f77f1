"""
Configuration management for the device-mapper thin-pool.

This module loads the pool configuration from a TOML file, converts the
human-readable size fields into byte and sector counts, and validates
every constraint the pool manager relies on before any device-mapper
operation is attempted.
"""

import tomllib
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from .errors import (
    ConfigDecodeError,
    FieldParseError,
    InvalidBlockAlignmentError,
    InvalidBlockSizeError,
    MissingFieldError,
    MultiError,
    SizeParseError,
)
from .logging import ThinPoolLogger, get_library_logger
from .units import SECTOR_SIZE, bytes_to_sectors, parse_size

# Thin-pool data block size limits, in sectors (64KiB .. 1GiB)
MIN_BLOCK_SIZE_SECTORS = 128
MAX_BLOCK_SIZE_SECTORS = 2097152

# Data block size must be a multiple of this many sectors (64KiB)
BLOCK_ALIGNMENT_SECTORS = 128

_library_logger = get_library_logger()

__all__ = [
    "BLOCK_ALIGNMENT_SECTORS",
    "CONFIG_KEYS",
    "MAX_BLOCK_SIZE_SECTORS",
    "MIN_BLOCK_SIZE_SECTORS",
    "PoolConfig",
    "PoolMode",
    "SECTOR_SIZE",
    "load_config",
]


class PoolMode(Enum):
    """Whether a configuration creates a new thin-pool or attaches to one."""

    NEW_POOL = "new"
    EXISTING_POOL = "existing"


def _key(name: str) -> Dict[str, str]:
    return {"key": name}


@dataclass
class PoolConfig:
    """
    Configuration for a device-mapper thin-pool.

    Attributes:
        root_path: Directory used by the pool manager for its own metadata
        pool_name: Name of the device-mapper thin-pool
        data_device: Block device holding pool data (new pools only)
        metadata_device: Block device holding pool metadata (new pools only)
        data_block_size: Human-readable data block size, e.g. "64k"
        base_image_size: Human-readable size of the base thin device, e.g. "10GB"
        data_block_size_sectors: Data block size in sectors, set by parse()
        base_image_size_bytes: Base image size in bytes, set by parse()
    """

    root_path: str = field(default="", metadata=_key("root_path"))
    pool_name: str = field(default="", metadata=_key("pool_name"))
    data_device: str = field(default="", metadata=_key("data_device"))
    metadata_device: str = field(default="", metadata=_key("meta_device"))
    data_block_size: str = field(default="", metadata=_key("data_block_size"))
    base_image_size: str = field(default="", metadata=_key("base_image_size"))

    data_block_size_sectors: int = field(default=0, init=False)
    base_image_size_bytes: int = field(default=0, init=False)

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        source: str = "<dict>",
        logger: Optional[ThinPoolLogger] = None,
    ) -> "PoolConfig":
        """Build a configuration from decoded key/value pairs.

        Args:
            data: Mapping keyed by the config file key names
            source: Where the data came from, used in messages
            logger: Logger for warnings about unknown keys

        Returns:
            A configuration with string fields populated and derived fields unset

        Raises:
            ConfigDecodeError: If a known key holds a non-string value
        """
        logger = logger or _library_logger

        kwargs = {}
        for f in fields(cls):
            if not f.init:
                continue
            key = f.metadata["key"]
            if key not in data:
                continue
            value = data[key]
            if not isinstance(value, str):
                message = f"{key} must be a string, got {type(value).__name__}"
                logger.log_decode_failed(source, message)
                raise ConfigDecodeError(source, message)
            kwargs[f.name] = value

        unknown = sorted(set(data) - set(CONFIG_KEYS))
        if unknown:
            logger.log_unknown_keys(source, unknown)

        return cls(**kwargs)

    @property
    def mode(self) -> PoolMode:
        """Pool mode implied by the configured fields.

        Any device, block size or block sector count selects a new pool;
        a configuration with none of them attaches to an existing pool.
        """
        if (
            self.data_device
            or self.metadata_device
            or self.data_block_size
            or self.data_block_size_sectors != 0
        ):
            return PoolMode.NEW_POOL
        return PoolMode.EXISTING_POOL

    def parse(self, logger: Optional[ThinPoolLogger] = None) -> None:
        """Compute the derived sector and byte counts from the size strings.

        Both size fields are parsed independently. An empty data block size
        is left at zero sectors since existing pools do not set one;
        validate() reports it when a new pool needs it. On failure the
        derived fields are reset to zero.

        Raises:
            MultiError: One FieldParseError per failed field, data block size first
        """
        errors = MultiError()

        sectors = 0
        if self.data_block_size:
            try:
                sectors = bytes_to_sectors(parse_size(self.data_block_size).unwrap())
            except SizeParseError as e:
                errors.append(
                    FieldParseError(
                        "data block size",
                        "data_block_size",
                        self.data_block_size,
                        str(e),
                    )
                )

        base_result = parse_size(self.base_image_size)
        if base_result.is_err():
            errors.append(
                FieldParseError(
                    "base image size",
                    "base_image_size",
                    self.base_image_size,
                    str(base_result.error),
                )
            )

        if errors:
            self.data_block_size_sectors = 0
            self.base_image_size_bytes = 0
            (logger or _library_logger).log_parse_failed(len(errors))
            raise errors

        self.data_block_size_sectors = sectors
        self.base_image_size_bytes = base_result.value

    def validate(self, logger: Optional[ThinPoolLogger] = None) -> None:
        """Check every field-presence and block size constraint.

        Validation never stops at the first failure and never modifies
        the configuration.

        Raises:
            MultiError: Every violated check, in a fixed order
        """
        logger = logger or _library_logger
        errors = MultiError()

        if not self.pool_name:
            errors.append(MissingFieldError("pool_name"))
        if not self.root_path:
            errors.append(MissingFieldError("root_path"))
        if not self.base_image_size:
            errors.append(MissingFieldError("base_image_size"))

        mode = self.mode
        if mode is PoolMode.NEW_POOL:
            if not self.data_device:
                errors.append(MissingFieldError("data_device"))
            if not self.metadata_device:
                errors.append(MissingFieldError("meta_device"))
            if not self.data_block_size:
                errors.append(MissingFieldError("data_block_size"))

            sectors = self.data_block_size_sectors
            if not MIN_BLOCK_SIZE_SECTORS <= sectors <= MAX_BLOCK_SIZE_SECTORS:
                errors.append(InvalidBlockSizeError())
            if sectors % BLOCK_ALIGNMENT_SECTORS != 0:
                errors.append(InvalidBlockAlignmentError())

        if errors:
            logger.log_validation_failed(len(errors))
            raise errors

        logger.log_pool_mode(self.pool_name, mode.value)
        logger.log_validation_passed(self.pool_name)


CONFIG_KEYS = tuple(f.metadata["key"] for f in fields(PoolConfig) if f.init)


def load_config(path: str, logger: Optional[ThinPoolLogger] = None) -> PoolConfig:
    """Load a thin-pool configuration from a TOML file.

    The returned configuration has its derived fields populated but is not
    validated; call validate() before handing it to the pool manager.

    Args:
        path: Path to the TOML configuration file
        logger: Logger for load events

    Returns:
        Parsed PoolConfig

    Raises:
        FileNotFoundError: If the path does not exist
        ConfigDecodeError: If the file is not a valid configuration document
        MultiError: If either size field fails to parse
    """
    logger = logger or _library_logger
    logger.log_config_loading(path)

    with open(path, "rb") as f:
        try:
            data = tomllib.load(f)
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
            logger.log_decode_failed(path, str(e))
            raise ConfigDecodeError(path, str(e)) from e

    config = PoolConfig.from_dict(data, source=path, logger=logger)
    config.parse(logger)

    logger.log_config_loaded(path, config.pool_name)
    return config
