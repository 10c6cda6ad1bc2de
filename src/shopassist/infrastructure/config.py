"""Application configuration.

Loads settings from ``SHOPASSIST_*`` environment variables (or a ``.env``
file) with sensible defaults.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Repo-root data directory when running from a source checkout.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SHOPASSIST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage
    data_dir: Path = _DEFAULT_DATA_DIR
    catalog_file: Path | None = None
    memory_file: Path | None = None

    # Catalog
    cache_catalog: bool = False
    search_limit: int = Field(default=10, ge=1)

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    @property
    def catalog_path(self) -> Path:
        return self.catalog_file or self.data_dir / "products.json"

    @property
    def memory_path(self) -> Path:
        return self.memory_file or self.data_dir / "working_memory.json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
