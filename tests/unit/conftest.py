"""Shared test fixtures."""

import json

import pytest

from rosarium.app import GardenApp
from rosarium.config import STORAGE_KEY
from rosarium.core.persistence import PersistenceAdapter
from tests.unit.fakes import ManualScheduler, MemoryStorage
from tests.unit.samples import FULL_RECORD, fake_encoder


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def persistence(storage: MemoryStorage, scheduler: ManualScheduler) -> PersistenceAdapter:
    return PersistenceAdapter(storage, scheduler)


@pytest.fixture
def garden(storage: MemoryStorage, scheduler: ManualScheduler) -> GardenApp:
    """An opened app over empty in-memory storage."""
    return GardenApp(storage, scheduler, encoder=fake_encoder).open()


@pytest.fixture
def seeded_storage() -> MemoryStorage:
    return MemoryStorage({STORAGE_KEY: json.dumps([FULL_RECORD])})
