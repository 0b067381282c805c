"""
Application settings with Pydantic v2 validation.

Loads configuration from environment variables with sensible defaults.
"""

from decimal import Decimal
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Storage configuration."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    data_dir: Path = Path("data")
    db_name: str = "purchasing.db"

    # SQLite settings
    pool_size: int = 5
    busy_timeout: int = 30000  # ms

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class OrderSettings(BaseSettings):
    """Purchase order engine configuration."""

    model_config = SettingsConfigDict(env_prefix="ORDERS_")

    vat_rate: Decimal = Decimal("0.07")

    # Order numbers look like PO25690219-P001
    number_prefix: str = "PO"
    sequence_marker: str = "-P"
    sequence_width: int = 3
    timezone: str = "Asia/Bangkok"

    # Number allocation retry settings
    max_allocation_attempts: int = 5
    retry_delay: float = 0.05
    retry_multiplier: float = 2.0

    # Who owns an order created without a user_id
    user_fallback: Literal["required", "configured", "first_user"] = "required"
    default_user_id: str | None = None

    delete_policy: Literal["any_status", "draft_only"] = "any_status"

    @field_validator("vat_rate")
    @classmethod
    def check_vat_rate(cls, v: Decimal) -> Decimal:
        if v < 0 or v >= 1:
            raise ValueError("vat_rate must be in [0, 1)")
        return v

    @field_validator("max_allocation_attempts")
    @classmethod
    def check_max_allocation_attempts(cls, v: int) -> int:
        if v < 1:
            raise ValueError("max_allocation_attempts must be at least 1")
        return v


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["*"]


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Purchase Order Service"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Sub-settings
    storage: StorageSettings = Field(default_factory=StorageSettings)
    orders: OrderSettings = Field(default_factory=OrderSettings)
    api: APISettings = Field(default_factory=APISettings)

    @field_validator("storage", mode="before")
    @classmethod
    def ensure_data_dir(cls, v: Any) -> StorageSettings:
        if isinstance(v, dict):
            settings = StorageSettings(**v)
        else:
            settings = v or StorageSettings()
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        return settings


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
