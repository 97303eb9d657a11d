"""Shared test fixtures for the nightlist test suite."""

from __future__ import annotations

import pytest

from nightlist.config import NightlistConfig
from nightlist.diff.reconciler import ListReconciler
from nightlist.sleep.store import InMemorySleepNightStore
from nightlist.sleep.tracker import SleepTracker


@pytest.fixture
def config() -> NightlistConfig:
    """Default test configuration with replay verification switched on."""
    return NightlistConfig(verify_edits=True)


@pytest.fixture
def reconciler(config: NightlistConfig) -> ListReconciler:
    """Reconciler using the default test config."""
    return ListReconciler(config)


class FakeClock:
    """Deterministic millisecond clock advancing by ``step`` per call."""

    def __init__(self, start: int = 1_700_000_000_000, step: int = 60 * 60 * 1000) -> None:
        self.now = start
        self.step = step

    def __call__(self) -> int:
        value = self.now
        self.now += self.step
        return value


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> InMemorySleepNightStore:
    return InMemorySleepNightStore()


@pytest.fixture
def tracker(store: InMemorySleepNightStore, clock: FakeClock) -> SleepTracker:
    return SleepTracker(store, clock=clock)
