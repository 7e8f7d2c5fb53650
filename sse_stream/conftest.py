"""
Shared pytest fixtures for all tests.
"""

import io

import pytest

from sse_stream.config import settings
from sse_stream.test_utils import StubSink


@pytest.fixture(name="sink")
def sink_fixture() -> StubSink:
    """A sink that accepts every write."""
    return StubSink()


@pytest.fixture(name="buffer")
def buffer_fixture():
    """An in-memory binary stream, the most common real sink."""
    with io.BytesIO() as buffer:
        yield buffer


@pytest.fixture(autouse=True)
def lenient_close(monkeypatch: pytest.MonkeyPatch):
    """Run every test with the default close policy, whatever the environment says."""
    monkeypatch.setattr(settings, "strict_close", False)
