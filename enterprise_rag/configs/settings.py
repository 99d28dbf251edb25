"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from enterprise_rag.configs.base import BaseSettings
from enterprise_rag.configs.ollama import OllamaSettings
from enterprise_rag.configs.rag import RagSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    rag: RagSettings = Field(default_factory=RagSettings)
    ollama: OllamaSettings = Field(default_factory=OllamaSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from enterprise_rag.configs import get_settings
        settings = get_settings()
    """
    return Settings()
