"""
tlvkit Test Configuration
=========================

Shared fixtures for the tlvkit test suite:
- Isolation of the default decoder configuration and its environment
- Stream doubles for sinks and sources with unusual behaviour
"""

import io

import pytest

from tlvkit.config import set_default_config


ENV_VARS = ("TLVKIT_MAX_VALUE_LENGTH", "TLVKIT_STRICT_EOF")


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Start every test with a clean environment and default config."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    set_default_config(None)
    yield
    set_default_config(None)


# =============================================================================
# Stream Doubles
# =============================================================================

class LimitedSink:
    """Sink that accepts at most ``limit`` bytes in total, then reports short writes."""

    def __init__(self, limit: int):
        self.limit = limit
        self.data = bytearray()

    def write(self, data: bytes) -> int:
        accepted = data[: self.limit - len(self.data)]
        self.data.extend(accepted)
        return len(accepted)


class SilentSink:
    """Sink whose write() returns None, like some file wrappers."""

    def __init__(self):
        self.data = bytearray()

    def write(self, data: bytes) -> None:
        self.data.extend(data)


class FailingSink:
    """Sink that raises OSError on every write."""

    def write(self, data: bytes) -> int:
        raise OSError("disk full")


class DribbleSource:
    """Source that hands out at most one byte per read, like a slow pipe."""

    def __init__(self, data: bytes):
        self._stream = io.BytesIO(data)

    def read(self, size: int = -1) -> bytes:
        return self._stream.read(min(size, 1) if size >= 0 else 1)


class FailingSource:
    """Source that raises OSError on every read."""

    def read(self, size: int = -1) -> bytes:
        raise OSError("device not ready")


@pytest.fixture
def limited_sink():
    """Factory for sinks that stop accepting after a number of bytes."""
    return LimitedSink


@pytest.fixture
def silent_sink() -> SilentSink:
    return SilentSink()


@pytest.fixture
def failing_sink() -> FailingSink:
    return FailingSink()


@pytest.fixture
def dribble_source():
    """Factory for one-byte-at-a-time sources."""
    return DribbleSource


@pytest.fixture
def failing_source() -> FailingSource:
    return FailingSource()
