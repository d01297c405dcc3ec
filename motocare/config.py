"""
Configuration module - settings loaded from MOTOCARE_* environment variables.

Access settings through get_settings() rather than reading os.environ.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_prefix="MOTOCARE_", extra="ignore", frozen=True)

    data_dir: Path = Field(
        default=Path("garage"),
        description="Directory holding one YAML document per account",
    )

    # Advisory service (Ollama-compatible)
    advisory_url: str = Field(default="http://localhost:11434")
    advisory_model: str = Field(default="llama3.2")
    advisory_timeout: float = Field(
        default=20.0,
        description="HTTP timeout in seconds for advisory requests",
    )


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
