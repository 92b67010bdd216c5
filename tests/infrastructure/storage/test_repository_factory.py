"""Tests for the repository factory."""

import pytest
import pytest_asyncio

from lost_and_found.infrastructure.storage.factory import RepositoryFactory
from lost_and_found.infrastructure.storage.memory_repository import InMemoryItemRepository
from lost_and_found.infrastructure.storage.sqlmodel_repository import SQLModelItemRepository


class FailingRepository(InMemoryItemRepository):
    """Repository whose initialization always fails."""

    async def initialize(self) -> None:
        raise ConnectionError("no database")


@pytest_asyncio.fixture
async def factory():
    """Create a factory instance."""
    factory = RepositoryFactory()
    yield factory
    await factory.shutdown_all()


def test_default_repositories_registered():
    """Test that memory and sql are registered and inactive."""
    factory = RepositoryFactory()
    assert factory.available_repositories == {"memory": False, "sql": False}


def test_register_duplicate():
    """Test that names are unique."""
    factory = RepositoryFactory()
    with pytest.raises(ValueError):
        factory.register_repository("memory", InMemoryItemRepository)


@pytest.mark.asyncio
async def test_create_repository(factory):
    """Test creation, reuse and lookup."""
    repository = await factory.create_repository("memory")

    assert isinstance(repository, InMemoryItemRepository)
    assert repository.provider_name == "memory"
    assert repository.is_available
    assert await factory.create_repository("memory") is repository
    assert factory.get_repository("memory") is repository
    assert factory.available_repositories["memory"] is True


@pytest.mark.asyncio
async def test_create_sql_repository_with_config(factory):
    """Test passing configuration through to the repository."""
    repository = await factory.create_repository("sql", database_url="sqlite://")

    assert isinstance(repository, SQLModelItemRepository)
    assert await repository.ping()


@pytest.mark.asyncio
async def test_create_unknown_repository(factory):
    """Test creating an unregistered repository."""
    with pytest.raises(ValueError):
        await factory.create_repository("mongo")


@pytest.mark.asyncio
async def test_initialization_failure(factory):
    """Test that failed repositories are wrapped and not kept."""
    factory.register_repository("failing", FailingRepository)

    with pytest.raises(RuntimeError):
        await factory.create_repository("failing")

    assert factory.get_repository("failing") is None


@pytest.mark.asyncio
async def test_shutdown_all(factory):
    """Test that shutdown releases active repositories."""
    repository = await factory.create_repository("memory")

    await factory.shutdown_all()

    assert not repository.is_available
    assert factory.get_repository("memory") is None
