"""Shared fixtures for aplib tests."""

from typing import Iterator

import pytest

from aplib.belief import BeliefSet
from aplib.config import get_settings
from aplib.random_source import set_random_source


class CounterBeliefSet(BeliefSet):
    """Belief set holding a single counter, bumped on every update."""

    def __init__(self, counter: int = 0) -> None:
        self.counter = counter
        self.updates = 0

    def update_beliefs(self) -> None:
        self.updates += 1


@pytest.fixture(autouse=True)
def isolated_runtime(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Clear cached settings and the shared random source around each test."""
    for name in (
        "APLIB_RANDOM_SEED",
        "APLIB_DEFAULT_EPSILON",
        "APLIB_MAX_CYCLES",
        "APLIB_LOG_LEVEL",
        "APLIB_LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    set_random_source(None)
    yield
    get_settings.cache_clear()
    set_random_source(None)


@pytest.fixture
def beliefs() -> CounterBeliefSet:
    return CounterBeliefSet()
