"""Application configuration management."""

import logging
import os
from typing import List

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class AppConfig(BaseModel):
    """Configuration for the lost and found service."""

    storage_backend: str = Field(default="memory", description="Repository name: 'memory' or 'sql'")
    database_url: str = Field(
        default="sqlite:///./lost_and_found.db",
        description="SQLAlchemy database URL for the 'sql' backend",
    )
    sql_echo: bool = Field(default=False, description="Log emitted SQL statements")
    cors_origins: List[str] = Field(default_factory=lambda: ["*"], description="Allowed CORS origins")
    log_level: str = Field(default="INFO", description="Root log level")
    host: str = "0.0.0.0"
    port: int = 5000

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create configuration from environment variables."""
        storage_backend = os.getenv('STORAGE_BACKEND', 'memory').lower()
        database_url = os.getenv('DATABASE_URL', 'sqlite:///./lost_and_found.db')
        sql_echo = os.getenv('SQL_ECHO', 'false').lower() == 'true'
        cors_origins = [
            origin.strip()
            for origin in os.getenv('CORS_ORIGINS', '*').split(',')
            if origin.strip()
        ]

        if storage_backend == 'memory':
            logger.warning("⚠️ Using in-memory storage - data is lost on restart, set STORAGE_BACKEND=sql to persist")
        else:
            logger.info(f"🗄️ Storage backend: {storage_backend}")

        return cls(
            storage_backend=storage_backend,
            database_url=database_url,
            sql_echo=sql_echo,
            cors_origins=cors_origins or ["*"],
            log_level=os.getenv('LOG_LEVEL', 'INFO').upper(),
            host=os.getenv('HOST', '0.0.0.0'),
            port=int(os.getenv('PORT', '5000')),
        )
