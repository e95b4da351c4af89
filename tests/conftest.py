"""Shared fixtures for bluejacket tests."""

from collections.abc import Iterator

import pytest

from bluejacket.dispatcher import clear_instances


@pytest.fixture(autouse=True)
def _isolated_instances() -> Iterator[None]:
    """Keyed dispatchers must not leak between tests."""
    clear_instances()
    yield
    clear_instances()
