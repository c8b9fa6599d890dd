"""
Configuration management for the contractor tracker.
"""

from decimal import Decimal
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# IRS standard business mileage rate (USD per mile), used unless overridden
MILEAGE_RATE = Decimal("0.725")

DEFAULT_DATA_FILE = "~/.contractor_tracker/data.json"


class TrackerConfig(BaseSettings):
    """Configuration settings for the contractor tracker."""

    # Storage Configuration
    data_file: Path = Field(default=Path(DEFAULT_DATA_FILE), alias="DATA_FILE")
    export_dir: Path = Field(default=Path("."), alias="EXPORT_DIR")

    # Billing Configuration
    mileage_rate: Decimal = Field(default=MILEAGE_RATE, alias="MILEAGE_RATE")

    # Application Configuration
    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    @field_validator("data_file", "export_dir")
    @classmethod
    def expand_user(cls, v: Path) -> Path:
        """Expand ``~`` in configured paths."""
        return Path(v).expanduser()

    @field_validator("mileage_rate")
    @classmethod
    def validate_mileage_rate(cls, v):
        """Ensure the mileage rate is not negative."""
        if v < 0:
            raise ValueError(f"Mileage rate must be >= 0, got {v}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Ensure log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Ensure environment is valid."""
        valid_envs = ["development", "testing", "production"]
        if v.lower() not in valid_envs:
            raise ValueError(f"Environment must be one of: {valid_envs}")
        return v.lower()


def load_config(env_file: Optional[str] = None) -> TrackerConfig:
    """Load configuration from environment variables and .env file."""
    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()

    return TrackerConfig()


# Global configuration instance
_config: Optional[TrackerConfig] = None


def get_config() -> TrackerConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config(env_file: Optional[str] = None) -> TrackerConfig:
    """Reload configuration (useful for testing)."""
    global _config
    _config = load_config(env_file)
    return _config
