"""
Error handling for the thin-pool configuration loader.

This module defines custom exceptions for loading, parsing and validating
a device-mapper thin-pool configuration, plus an aggregating error that
carries every individual failure found in one pass.
"""

# Functional error handling patterns
from typing import Callable, Generic, Iterator, List, Optional, TypeVar, Union


class ThinPoolError(Exception):
    """Base exception for all thin-pool related errors."""

    pass


class ConfigError(ThinPoolError):
    """Exception raised when configuration is invalid."""

    pass


class ConfigDecodeError(ConfigError):
    """Exception raised when a configuration file cannot be decoded."""

    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message
        super().__init__(f"failed to decode config file {path}: {message}")


class SizeParseError(ConfigError):
    """Exception raised when a human-readable size string is invalid."""

    pass


class FieldParseError(ConfigError):
    """Exception raised when a size field of the configuration fails to parse."""

    def __init__(self, label: str, field: str, value: str, reason: str = ""):
        self.label = label
        self.field = field
        self.value = value
        self.reason = reason
        message = f'failed to parse {label}: "{value}"'
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class MissingFieldError(ConfigError):
    """Exception raised when a required field is empty."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"{field} is empty")


class InvalidBlockSizeError(ConfigError):
    """Exception raised when the data block size is outside the thin-pool limits."""

    def __init__(self, message: str = "invalid block size"):
        super().__init__(message)


class InvalidBlockAlignmentError(ConfigError):
    """Exception raised when the data block size is not aligned."""

    def __init__(self, message: str = "invalid block alignment"):
        super().__init__(message)


class MultiError(ConfigError):
    """
    Ordered collection of independent errors raised as a single exception.

    Errors are kept in the order they were appended. Nothing is merged or
    deduplicated, so two failures on the same field both show up.
    """

    def __init__(self, errors: Optional[List[Exception]] = None):
        self.errors: List[Exception] = list(errors or [])
        super().__init__()

    def append(self, error: Exception) -> None:
        """Add one error to the end of the collection."""
        self.errors.append(error)

    def raise_if_any(self) -> None:
        """Raise this collection if it holds at least one error."""
        if self.errors:
            raise self

    def __len__(self) -> int:
        return len(self.errors)

    def __bool__(self) -> bool:
        return bool(self.errors)

    def __iter__(self) -> Iterator[Exception]:
        return iter(self.errors)

    def __str__(self) -> str:
        if not self.errors:
            return "no errors"
        noun = "error" if len(self.errors) == 1 else "errors"
        lines = [f"{len(self.errors)} {noun} occurred:"]
        lines.extend(f"\t* {error}" for error in self.errors)
        return "\n".join(lines)


T = TypeVar("T")
E = TypeVar("E", bound=Exception)
U = TypeVar("U")  # For mapped results
F = TypeVar("F", bound=Exception)  # For mapped errors


class Result(Generic[T, E]):
    """Functional result type for error handling."""

    def __init__(
        self, success: bool, value: Union[T, None] = None, error: Union[E, None] = None
    ):
        self.success = success
        self.value = value
        self.error = error

    @classmethod
    def ok(cls, value: T) -> "Result[T, E]":
        """Create a successful result."""
        return cls(True, value=value)

    @classmethod
    def err(cls, error: E) -> "Result[T, E]":
        """Create an error result."""
        return cls(False, error=error)

    def is_ok(self) -> bool:
        """Check if result is successful."""
        return self.success

    def is_err(self) -> bool:
        """Check if result is an error."""
        return not self.success

    def unwrap(self) -> T:
        """Get the value or raise the error."""
        if self.success:
            if self.value is None:
                raise ValueError("Result is successful but has no value")
            return self.value
        if self.error is None:
            raise ValueError("Result is an error but has no error value")
        raise self.error

    def unwrap_or(self, default: T) -> T:
        """Get the value or return default."""
        return self.value if self.success and self.value is not None else default

    def map(self, fn: Callable[[T], U]) -> "Result[U, E]":
        """Apply function to successful result."""
        if self.success and self.value is not None:
            return Result.ok(fn(self.value))
        return self  # type: ignore

    def map_err(self, fn: Callable[[E], F]) -> "Result[T, F]":
        """Apply function to error result."""
        if not self.success and self.error is not None:
            return Result.err(fn(self.error))
        return self  # type: ignore
