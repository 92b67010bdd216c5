"""Test configuration and common fixtures."""

from datetime import datetime
from typing import Callable

import pytest
import pytest_asyncio

from lost_and_found.domain.models.found_item import FoundItemRecord
from lost_and_found.domain.models.lost_item import LostItemReport
from lost_and_found.domain.services.lost_and_found_service import LostAndFoundService
from lost_and_found.infrastructure.storage.memory_repository import InMemoryItemRepository
from lost_and_found.infrastructure.storage.sqlmodel_repository import SQLModelItemRepository


@pytest.fixture
def make_lost_item() -> Callable[..., LostItemReport]:
    """Build lost item reports with sensible defaults."""
    def _make(**overrides) -> LostItemReport:
        fields = {
            "reporter_id": 1,
            "item_type": "backpack",
            "lost_location": "main library",
            "color": "black",
        }
        fields.update(overrides)
        return LostItemReport(**fields)

    return _make


@pytest.fixture
def make_found_item() -> Callable[..., FoundItemRecord]:
    """Build found item records with sensible defaults."""
    def _make(**overrides) -> FoundItemRecord:
        fields = {
            "admin_id": 99,
            "item_type": "backpack",
            "found_location": "library",
            "found_time": datetime(2024, 1, 1, 12, 0),
            "color": "black",
        }
        fields.update(overrides)
        return FoundItemRecord(**fields)

    return _make


@pytest_asyncio.fixture
async def memory_repository() -> InMemoryItemRepository:
    """Provide an initialized in-memory repository."""
    repository = InMemoryItemRepository()
    await repository.initialize()
    yield repository
    await repository.shutdown()


@pytest_asyncio.fixture
async def sql_repository() -> SQLModelItemRepository:
    """Provide a SQLModel repository on a private in-memory SQLite database."""
    repository = SQLModelItemRepository(database_url="sqlite://")
    await repository.initialize()
    yield repository
    await repository.shutdown()


@pytest_asyncio.fixture
async def service(memory_repository: InMemoryItemRepository) -> LostAndFoundService:
    """Provide a service backed by the in-memory repository."""
    return LostAndFoundService(memory_repository)
