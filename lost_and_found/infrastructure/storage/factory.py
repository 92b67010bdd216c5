"""Factory for creating and managing item repositories."""

from typing import Dict, Optional, Type

from ...domain.ports.item_repository import ItemRepository
from .memory_repository import InMemoryItemRepository
from .sqlmodel_repository import SQLModelItemRepository


class RepositoryFactory:
    """Factory for creating and managing item repositories.

    This factory maintains a registry of repository implementations
    and handles their lifecycle (initialization, shutdown).
    """

    def __init__(self):
        """Initialize the factory."""
        self._repository_registry: Dict[str, Type[ItemRepository]] = {}
        self._active_repositories: Dict[str, ItemRepository] = {}

        # Register default repositories
        self.register_repository("memory", InMemoryItemRepository)
        self.register_repository("sql", SQLModelItemRepository)

    def register_repository(
        self, name: str, repository_class: Type[ItemRepository]
    ) -> None:
        """Register a new repository class.

        Args:
            name: Unique identifier for the repository
            repository_class: The repository class to register
        """
        if name in self._repository_registry:
            raise ValueError(f"Repository {name} already registered")
        self._repository_registry[name] = repository_class

    async def create_repository(self, name: str, **config) -> ItemRepository:
        """Create and initialize a repository instance.

        Args:
            name: Name of the repository to create
            **config: Repository-specific configuration

        Returns:
            Initialized repository instance

        Raises:
            ValueError: If repository not registered
            RuntimeError: If initialization fails
        """
        if name not in self._repository_registry:
            raise ValueError(f"Repository {name} not registered")

        if name in self._active_repositories:
            return self._active_repositories[name]

        repository = self._repository_registry[name](provider_name=name, **config)

        try:
            await repository.initialize()
        except Exception as e:
            raise RuntimeError(f"Failed to initialize repository {name}: {e}")

        self._active_repositories[name] = repository
        return repository

    def get_repository(self, name: str) -> Optional[ItemRepository]:
        """Get an active repository instance by name."""
        return self._active_repositories.get(name)

    async def shutdown_repository(self, name: str) -> None:
        """Shutdown a specific repository."""
        repository = self._active_repositories.pop(name, None)
        if repository:
            await repository.shutdown()

    async def shutdown_all(self) -> None:
        """Shutdown all active repositories."""
        for name in list(self._active_repositories.keys()):
            await self.shutdown_repository(name)

    @property
    def available_repositories(self) -> Dict[str, bool]:
        """Get dictionary of registered repositories and whether they are active."""
        return {
            name: name in self._active_repositories
            for name in self._repository_registry
        }
