"""Shared fixtures."""

import pytest

from factories import make_tables


@pytest.fixture
def tables():
    """Role and class tables for the team A / team B fixtures."""
    return make_tables()


@pytest.fixture
def anyio_backend():
    return "asyncio"
