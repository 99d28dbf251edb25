"""
Ollama runtime configuration.

Dependencies: pydantic, pydantic_settings
System role: Embedding endpoint configuration
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class OllamaSettings(BaseSettings):
    """Connection settings for the local Ollama runtime."""

    model_config = SettingsConfigDict(
        env_prefix="OLLAMA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(
        default="http://127.0.0.1:11434",
        description="Base URL of the Ollama HTTP API",
    )
    timeout_sec: float = Field(
        default=60.0,
        gt=0,
        description="Per-request timeout for embedding calls",
    )

    @field_validator("host")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")
