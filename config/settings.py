"""
Living Burden Atlas - Application Settings
Manages environment variables and configuration using Pydantic
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Nothing is required; every value has a working default so the
    index engine can run without a .env file.
    """

    # Application
    ENVIRONMENT: str = "production"
    LOG_LEVEL: str = "INFO"

    # File storage
    EXPORT_DIR: str = "exports"
    LOG_DIR: str = ""  # Empty = console only

    # Source dataset (community districts with indicator properties)
    SOURCE_GEOJSON_PATH: str = "cd_final_cleaned.geojson"

    # Composite index output
    TLBI_FIELD: str = "TLBI"

    # Classification
    JENKS_CLASSES: int = 6
    UNCLASSIFIED_COLOR: str = "#ccc"
    LEGEND_DECIMALS: int = 2

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Returns cached settings instance.
    Uses lru_cache to avoid re-reading .env on every call.
    """
    return Settings()
