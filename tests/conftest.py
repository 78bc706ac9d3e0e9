"""Shared test fixtures."""

import pytest

from tests.helpers import random_walk


@pytest.fixture
def walk_closes() -> list[float]:
    """300-bar random walk starting at 100."""
    return random_walk()
