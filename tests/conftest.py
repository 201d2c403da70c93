"""Pytest configuration and shared fixtures for Teleinfo tests."""
import pytest

from teleinfo_frames import FakeStream, SAMPLE_FRAME


@pytest.fixture
def sample_frame() -> bytes:
    return SAMPLE_FRAME


@pytest.fixture
def stream_factory():
    """Create fake streams preloaded with data."""
    def _factory(data: bytes = b"", error: Exception | None = None) -> FakeStream:
        return FakeStream(data, error)
    return _factory
