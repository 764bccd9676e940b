"""
Configuration Management for Family Budget

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Storage location, sample seeding and dashboard defaults are all
validated once at startup instead of being scattered across modules.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Local key-value storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="FAMILY_BUDGET_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    backend: str = Field(
        default="json_file",
        pattern="^(json_file|memory)$",
        description="Storage backend: one JSON file per collection, or in-memory"
    )
    data_dir: Path = Field(
        default=Path.home() / ".family_budget",
        description="Directory holding <collection>.json files"
    )

    # Write retries (local disk can be briefly locked by sync tools/antivirus)
    write_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="How many times a failed write is attempted"
    )
    retry_wait_seconds: float = Field(
        default=0.2,
        ge=0.0,
        le=5.0,
        description="Base wait between write attempts (exponential backoff)"
    )

    @field_validator('data_dir')
    @classmethod
    def expand_data_dir(cls, v: Path) -> Path:
        """Allow '~' in the configured path."""
        return Path(v).expanduser()


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="FAMILY_BUDGET_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    # First-run behaviour
    seed_sample_data: bool = Field(
        default=True,
        description="Install sample transactions/goals when a collection was never saved"
    )

    # Category taxonomy
    enforce_category_taxonomy: bool = Field(
        default=False,
        description="Reject categories outside the income/expense allowed lists"
    )

    # Dashboard defaults
    top_categories_limit: int = Field(
        default=5,
        ge=1,
        le=50,
        description="How many expense categories the dashboard ranks"
    )
    daily_average_period_days: int = Field(
        default=30,
        ge=1,
        le=366,
        description="Period length used for the daily average expense"
    )


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid} plus
    "<name>_error" entries for the sections that failed.
    """
    results = {}

    settings = get_settings()

    try:
        _ = settings.storage
        results["storage"] = True
    except Exception as e:
        results["storage"] = False
        results["storage_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
