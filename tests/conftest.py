"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from tmplpack import CodecConfig


@pytest.fixture
def little() -> CodecConfig:
    """Configuration of a little-endian host."""
    return CodecConfig(byte_order="little")


@pytest.fixture
def big() -> CodecConfig:
    """Configuration of a big-endian host."""
    return CodecConfig(byte_order="big")


@pytest.fixture
def sample_payload() -> bytes:
    """Sample binary payload for testing."""
    return b"Hello, packed world!"
