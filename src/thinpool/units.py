"""
Human-readable size parsing for thin-pool configuration values.

Sizes are written as a decimal number followed by an optional unit suffix,
e.g. "512", "64k", "1mb", "128Mb", "1.5 GiB". Units are binary
(1k = 1024 bytes) and case-insensitive.
"""

import re
from decimal import Decimal, localcontext

from .errors import Result, SizeParseError

SECTOR_SIZE = 512

# Largest byte count a device-mapper target can address (signed 64-bit)
MAX_SIZE_BYTES = 2**63 - 1

KiB = 1024
MiB = 1024 * KiB
GiB = 1024 * MiB
TiB = 1024 * GiB
PiB = 1024 * TiB

BINARY_MULTIPLIERS = {
    "": 1,
    "k": KiB,
    "m": MiB,
    "g": GiB,
    "t": TiB,
    "p": PiB,
}

_SIZE_PATTERN = re.compile(
    r"(\d+(?:\.\d+)?) ?([kmgtp])?i?b?", re.IGNORECASE | re.ASCII
)


def parse_size(text: str) -> Result[int, SizeParseError]:
    """Parse a human-readable size into a byte count.

    Args:
        text: Size string such as "1mb" or "128Mb"

    Returns:
        Result holding the byte count, or a SizeParseError describing why
        the string was rejected
    """
    if not isinstance(text, str) or not text:
        return Result.err(SizeParseError(f"invalid size: {text!r}"))

    match = _SIZE_PATTERN.fullmatch(text)
    if match is None:
        return Result.err(SizeParseError(f"invalid size: {text!r}"))

    number, unit = match.groups()
    multiplier = BINARY_MULTIPLIERS[(unit or "").lower()]
    # Wide enough for every digit of the product, so truncation is exact
    with localcontext() as ctx:
        ctx.prec = len(number) + len(str(multiplier))
        size = int(Decimal(number) * multiplier)
    if size > MAX_SIZE_BYTES:
        return Result.err(SizeParseError(f"size out of range: {text!r}"))

    return Result.ok(size)


def ram_in_bytes(text: str) -> int:
    """Parse a human-readable size, raising SizeParseError on failure."""
    return parse_size(text).unwrap()


def bytes_to_sectors(size: int) -> int:
    """Convert a byte count to a whole number of sectors.

    Raises:
        SizeParseError: If the size is not a multiple of the sector size
    """
    if size % SECTOR_SIZE != 0:
        raise SizeParseError(
            f"{size} bytes is not aligned to the {SECTOR_SIZE}-byte sector size"
        )
    return size // SECTOR_SIZE
