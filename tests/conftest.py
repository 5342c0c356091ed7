"""Shared fixtures: a settable clock, an in-memory store and a seeded engine."""

from __future__ import annotations

from random import Random

import pytest

from snakedark.config import GameConfig
from snakedark.engine import SimulationEngine
from snakedark.storage import MemoryStore, StorageService


class FakeClock:
    """Callable clock returning seconds; tests move it by hand."""

    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def engine(clock: FakeClock, store: MemoryStore) -> SimulationEngine:
    return SimulationEngine(GameConfig(), StorageService(store), Random(0), clock)
