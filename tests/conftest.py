"""
Pytest fixtures and configuration for thinpool tests.

This file contains shared fixtures and test configuration following pytest best practices.
"""

from pathlib import Path
from typing import Dict, Union

import pytest

from thinpool.config import PoolConfig
from thinpool.logging import ThinPoolLogger


class PoolConfigTestDataBuilder:
    """Builder for creating thin-pool config files in TOML form."""

    def __init__(self):
        self._values: Dict[str, object] = {}

    def with_pool(
        self, pool_name: str = "test", root_path: str = "/tmp"
    ) -> "PoolConfigTestDataBuilder":
        """Set the pool identity."""
        self._values["pool_name"] = pool_name
        self._values["root_path"] = root_path
        return self

    def with_devices(
        self, data_device: str = "/dev/loop0", meta_device: str = "/dev/loop1"
    ) -> "PoolConfigTestDataBuilder":
        """Set the data and metadata block devices."""
        self._values["data_device"] = data_device
        self._values["meta_device"] = meta_device
        return self

    def with_sizes(
        self, data_block_size: str = "1mb", base_image_size: str = "128Mb"
    ) -> "PoolConfigTestDataBuilder":
        """Set the human-readable size fields."""
        self._values["data_block_size"] = data_block_size
        self._values["base_image_size"] = base_image_size
        return self

    def with_value(self, key: str, value: object) -> "PoolConfigTestDataBuilder":
        """Set an arbitrary key, including unknown or mistyped ones."""
        self._values[key] = value
        return self

    def to_toml(self) -> str:
        """Render the collected values as a TOML document."""
        lines = []
        for key, value in self._values.items():
            if isinstance(value, str):
                lines.append(f'{key} = "{value}"')
            elif isinstance(value, bool):
                lines.append(f"{key} = {str(value).lower()}")
            else:
                lines.append(f"{key} = {value}")
        return "\n".join(lines) + "\n"

    def build(self, base_path: Path, name: str = "config.toml") -> Path:
        """Write the TOML document and return its path."""
        path = base_path / name
        path.write_text(self.to_toml())
        return path


@pytest.fixture
def logger():
    """Create a logger instance for testing."""
    return ThinPoolLogger("test_logger", verbose=False)


@pytest.fixture
def config_builder():
    """Provide the config builder for custom config files."""
    return PoolConfigTestDataBuilder()


@pytest.fixture
def new_pool_config_file(tmp_path, config_builder):
    """Create a config file describing a new pool on loop devices."""
    return config_builder.with_pool().with_devices().with_sizes().build(tmp_path)


@pytest.fixture
def existing_pool_config_file(tmp_path, config_builder):
    """Create a config file that attaches to an existing pool."""
    return (
        config_builder.with_pool()
        .with_value("base_image_size", "10GB")
        .build(tmp_path, "existing.toml")
    )


@pytest.fixture
def write_file(tmp_path):
    """Write raw text or bytes to a file under tmp_path."""

    def _write(content: Union[str, bytes], name: str = "config.toml") -> Path:
        path = tmp_path / name
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content)
        return path

    return _write


@pytest.fixture
def existing_pool_config():
    """Create an in-memory config that reuses an existing pool."""
    return PoolConfig(pool_name="test", root_path="test", base_image_size="10mb")
