"""Application configuration settings."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseModel):
    """Local entry storage configuration."""

    data_dir: Path = Field(default=Path("/tmp/.pm_data"))
    sync_file_name: str = Field(default=".sync_status")
    # Lookups fall back to filename prefix matching unless this is set
    exact_id_lookup: bool = Field(default=False)

    @property
    def sync_file_path(self) -> Path:
        return Path(self.data_dir).expanduser() / self.sync_file_name


class AuthSettings(BaseModel):
    """Authentication token cache configuration."""

    token_path: Path = Field(default_factory=lambda: Path.home() / ".pm_token")


class RemoteSettings(BaseModel):
    """Remote authority configuration."""

    base_url: str = Field(default="http://localhost:8079")
    # None leaves requests without a deadline
    timeout_seconds: Optional[float] = Field(default=None, gt=0)


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO")
    format: str = Field(default="console")
    file_path: Optional[str] = Field(default=None)


class AppSettings(BaseSettings):
    """Main application settings.

    Nested values can be set from the environment, e.g.
    ``VAULTSYNC_REMOTE__BASE_URL=https://vault.example.com``.
    """

    name: str = Field(default="vaultsync")
    environment: str = Field(default="development")

    # Sub-settings
    storage: StorageSettings = Field(default_factory=StorageSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    remote: RemoteSettings = Field(default_factory=RemoteSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_prefix="VAULTSYNC_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


_settings: Optional[AppSettings] = None


def get_settings() -> AppSettings:
    """Get application settings."""
    global _settings
    if _settings is None:
        _settings = AppSettings()
    return _settings


def set_settings(settings: Optional[AppSettings]) -> None:
    """Replace the cached settings instance (``None`` forces a reload)."""
    global _settings
    _settings = settings
