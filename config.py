"""
Bookmark Sync - Shared Configuration Module

This module provides centralized configuration management for the API and
the ingest CLI. It loads settings from environment variables and provides
typed access.
"""

from pathlib import Path
from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database configuration"""
    url: str = Field(alias="DATABASE_URL")
    pool_min_size: int = Field(default=2, alias="DB_POOL_MIN_SIZE")
    pool_max_size: int = Field(default=10, alias="DB_POOL_MAX_SIZE")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


class UploadSettings(BaseSettings):
    """Upload directory and size limits for bookmark imports"""
    upload_dir: Path = Field(default=Path("uploads"), alias="UPLOAD_DIR")
    max_upload_bytes: int = Field(default=10 * 1024 * 1024, alias="MAX_UPLOAD_BYTES")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


class ExportSettings(BaseSettings):
    """Export configuration"""
    limit: int = Field(default=10000, alias="EXPORT_LIMIT")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


class AppSettings(BaseSettings):
    """General application settings"""
    env: str = Field(default="development", alias="APP_ENV")
    debug: bool = Field(default=False, alias="APP_DEBUG")
    default_user_id: str = Field(default="", alias="DEFAULT_USER_ID")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


class Config:
    """Main configuration class that combines all settings"""

    def __init__(self):
        self.database = DatabaseSettings()
        self.uploads = UploadSettings()
        self.export = ExportSettings()
        self.app = AppSettings()

    @property
    def is_development(self) -> bool:
        return self.app.env == "development"

    @property
    def is_production(self) -> bool:
        return self.app.env == "production"


_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance, loading it on first use"""
    global _config
    if _config is None:
        _config = Config()
    return _config


def load_env(env_file: str = ".env") -> bool:
    """Load environment variables from file. Returns False if it is missing."""
    from dotenv import load_dotenv
    env_path = Path(env_file)
    if not env_path.exists():
        return False
    load_dotenv(env_path)
    return True
