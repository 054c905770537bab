from pathlib import Path
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = "WARNING"
    LOG_JSON: bool = False  # True for structured JSON, False for colored console output

    # Message catalog
    CATALOG_DIRS: list[Path] = []  # Extra YAML bundles layered over the packaged ones, in order

    model_config = SettingsConfigDict(env_prefix="VALIDATA_", env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()
