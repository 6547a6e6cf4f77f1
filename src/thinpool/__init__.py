# Thin-pool configuration package
# Loads, parses and validates device-mapper thin-pool configuration

from .config import (
    BLOCK_ALIGNMENT_SECTORS,
    MAX_BLOCK_SIZE_SECTORS,
    MIN_BLOCK_SIZE_SECTORS,
    SECTOR_SIZE,
    PoolConfig,
    PoolMode,
    load_config,
)
from .errors import (
    ConfigDecodeError,
    ConfigError,
    FieldParseError,
    InvalidBlockAlignmentError,
    InvalidBlockSizeError,
    MissingFieldError,
    MultiError,
    SizeParseError,
    ThinPoolError,
)
from .units import parse_size, ram_in_bytes
from .version import __version__

__all__ = [
    "BLOCK_ALIGNMENT_SECTORS",
    "MAX_BLOCK_SIZE_SECTORS",
    "MIN_BLOCK_SIZE_SECTORS",
    "SECTOR_SIZE",
    "PoolConfig",
    "PoolMode",
    "load_config",
    "ThinPoolError",
    "ConfigError",
    "ConfigDecodeError",
    "SizeParseError",
    "FieldParseError",
    "MissingFieldError",
    "InvalidBlockSizeError",
    "InvalidBlockAlignmentError",
    "MultiError",
    "parse_size",
    "ram_in_bytes",
    "__version__",
]
