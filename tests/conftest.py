"""Test configuration and shared fixtures."""

import pytest

from itgl.core.fresh import FreshSupply
from itgl.core.syntax import Environment


@pytest.fixture
def supply() -> FreshSupply:
    """A fresh identifier supply; ids start at 1."""
    return FreshSupply()


@pytest.fixture
def empty_env() -> Environment:
    return Environment.empty()
