"""Application settings and configuration."""

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageBackend(str, Enum):
    """Statically known storage adapters."""

    SQLALCHEMY = "sqlalchemy"
    SQLITE = "sqlite"


def get_default_data_dir() -> Path:
    """Return the default data directory."""
    return Path.home() / ".brokerage"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="BROKERAGE_",
    )

    app_name: str = "Brokerage Portfolio Engine"
    app_version: str = "0.1.0"

    # Data directory (database files live here)
    data_dir: Optional[Path] = None

    # Database URL for the SQLAlchemy backend (derived from data_dir if not set)
    database_url: Optional[str] = None

    storage_backend: StorageBackend = StorageBackend.SQLALCHEMY
    log_level: str = "INFO"

    # Reporting defaults
    recent_activity_limit: int = 10
    top_assets_limit: int = 5

    def get_data_dir(self) -> Path:
        """Get the data directory, creating it if needed."""
        data_dir = self.data_dir or get_default_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_database_path(self) -> Path:
        """Path of the SQLite database file."""
        return self.get_data_dir() / "brokerage.db"

    def get_database_url(self) -> str:
        """Get database URL, deriving from data_dir if not set."""
        if self.database_url:
            return self.database_url
        return f"sqlite:///{self.get_database_path()}"


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
