"""Pytest configuration and shared fixtures."""

import pytest

from tests.helpers import StubTransport


@pytest.fixture
def transport() -> StubTransport:
    """Stub transport with no queued responses.

    Returns:
        StubTransport to queue responses on.
    """
    return StubTransport()
