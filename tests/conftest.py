from __future__ import annotations

import itertools

import pytest

from attendance_tracker.repository import EntityRepository
from attendance_tracker.storage.memory_store import InMemoryStore


class StepClock:
    """Millisecond clock that moves forward one second per reading."""

    def __init__(self, start: int = 1_709_251_200_000):
        self.now = start

    def __call__(self) -> int:
        self.now += 1000
        return self.now


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def repo(store, clock) -> EntityRepository:
    counter = itertools.count(1)
    return EntityRepository(store, id_factory=lambda: f"id-{next(counter)}", clock=clock)


@pytest.fixture
def ada(repo):
    return repo.add_employee(
        name="Ada",
        employee_id="E1",
        department="Engineering",
        position="Senior",
        join_date="2024-01-01",
    )


@pytest.fixture
def grace(repo):
    return repo.add_employee(
        name="Grace",
        employee_id="E2",
        department="Sales",
        position="Manager",
        join_date="2023-06-15",
    )
