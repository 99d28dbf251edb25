"""
Configuration management module.

Provides centralized, type-safe configuration using Pydantic Settings.
All config modules support environment variable mapping with validation.
"""

from enterprise_rag.configs.ollama import OllamaSettings
from enterprise_rag.configs.rag import RagSettings
from enterprise_rag.configs.settings import Settings, get_settings

__all__ = ["OllamaSettings", "RagSettings", "Settings", "get_settings"]
