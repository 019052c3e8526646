"""
Unified application settings.

Aggregates all configuration modules into a single Settings class and
holds the runtime switches archmen.main reads at startup.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator

from archmen.configs.base import BaseSettings
from archmen.configs.database import DatabaseSettings
from archmen.configs.knowledge_base import KnowledgeBaseSettings
from archmen.configs.openai import OpenAISettings
from archmen.configs.storage import StorageSettings
from archmen.configs.supabase import SupabaseSettings

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Deployment stage; uvicorn auto-reload only runs in development",
    )
    debug: bool = Field(
        default=False,
        description="FastAPI debug mode (tracebacks in unhandled 500 responses)",
    )
    log_level: str = Field(default="INFO", description="Root log level applied at startup")

    database: DatabaseSettings = DatabaseSettings()
    openai: OpenAISettings = OpenAISettings()
    knowledge_base: KnowledgeBaseSettings = KnowledgeBaseSettings()
    supabase: SupabaseSettings = SupabaseSettings()
    storage: StorageSettings = StorageSettings()

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from archmen.configs import get_settings
        settings = get_settings()
        settings.knowledge_base.chunk_size
    """
    return Settings()
