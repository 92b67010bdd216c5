"""Dependency injection configuration for hexagonal architecture."""

import logging
from functools import lru_cache
from typing import Any, Dict, Optional

from ..domain.ports.item_repository import ItemRepository
from ..domain.services.lost_and_found_service import LostAndFoundService
from .config import AppConfig
from .storage.factory import RepositoryFactory

logger = logging.getLogger(__name__)


class ServiceContainer:
    """Service container for dependency injection."""

    def __init__(self, config: Optional[AppConfig] = None):
        """Initialize service container.

        Args:
            config: Application configuration, read from the environment if omitted
        """
        self._config = config or AppConfig.from_env()
        self._repository_factory = RepositoryFactory()
        self._services: Dict[str, Any] = {'lost_and_found_service': None}

    def _repository_options(self) -> Dict[str, Any]:
        if self._config.storage_backend == "sql":
            return {
                "database_url": self._config.database_url,
                "echo": self._config.sql_echo,
            }
        return {}

    async def _setup_repository(self) -> ItemRepository:
        """Create and initialize the configured repository."""
        name = self._config.storage_backend
        logger.info(f"🗄️ Setting up '{name}' repository...")
        repository = await self._repository_factory.create_repository(name, **self._repository_options())
        logger.info("✅ Repository ready")
        return repository

    async def _ensure_lost_and_found_service(self) -> LostAndFoundService:
        """Ensure the lost and found service is created with its repository."""
        if self._services['lost_and_found_service'] is None:
            logger.info("🔧 Creating LostAndFoundService...")
            repository = await self._setup_repository()
            self._services['lost_and_found_service'] = LostAndFoundService(repository)
            logger.info("✅ LostAndFoundService created")

        return self._services['lost_and_found_service']

    def get(self, service_name: str) -> Any:
        """Get a service by name.

        Args:
            service_name: Name of the service

        Returns:
            Service instance, None if not created yet

        Raises:
            KeyError: If service not found
        """
        if service_name not in self._services:
            raise KeyError(f"Service '{service_name}' not found")
        return self._services[service_name]

    async def get_lost_and_found_service(self) -> LostAndFoundService:
        """Get the lost and found service with its repository."""
        return await self._ensure_lost_and_found_service()

    async def startup(self) -> None:
        """Create services eagerly so storage problems surface at boot."""
        await self._ensure_lost_and_found_service()

    async def shutdown(self) -> None:
        """Release repositories and drop created services."""
        logger.info("🔄 Shutting down service container...")
        await self._repository_factory.shutdown_all()
        self._services['lost_and_found_service'] = None

    @property
    def config(self) -> AppConfig:
        """Get the application configuration."""
        return self._config


# Global service container instance
@lru_cache()
def get_service_container() -> ServiceContainer:
    """Get global service container instance.

    Returns:
        Service container instance
    """
    return ServiceContainer()


async def get_lost_and_found_service() -> LostAndFoundService:
    """FastAPI dependency for the lost and found service."""
    container = get_service_container()
    return await container.get_lost_and_found_service()
