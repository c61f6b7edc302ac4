"""
Configuration Management for Pocket Ledger

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Each concern gets its own settings class and env prefix, so a missing
or malformed value points straight at the section it belongs to.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Local key-value storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="POCKET_LEDGER_STORAGE_",
        extra="ignore"
    )

    data_dir: Path = Field(
        default=Path("data"),
        description="Directory holding the local store file"
    )
    store_filename: str = Field(
        default="pocket_ledger.json",
        min_length=1,
        description="File name of the key-value store inside data_dir"
    )

    # Keys within the store
    transactions_key: str = Field(
        default="transaksiKeuangan",
        min_length=1,
        description="Key under which the transaction list is kept"
    )
    user_key: str = Field(
        default="userKeuangan",
        min_length=1,
        description="Key under which the signed-in user is kept"
    )

    audit_filename: str = Field(
        default="audit.jsonl",
        min_length=1,
        description="Append-only audit log file inside data_dir"
    )

    write_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="How many times a failed write is attempted"
    )

    @property
    def store_path(self) -> Path:
        """Full path of the store file."""
        return self.data_dir / self.store_filename

    @property
    def audit_path(self) -> Path:
        return self.data_dir / self.audit_filename


class ExportSettings(BaseSettings):
    """CSV report export configuration."""

    model_config = SettingsConfigDict(
        env_prefix="POCKET_LEDGER_EXPORT_",
        extra="ignore"
    )

    report_prefix: str = Field(
        default="financial_report",
        min_length=1,
        description="Prefix of exported report file names"
    )
    file_extension: str = Field(
        default="csv",
        description="Extension of exported report files"
    )
    media_type: str = Field(
        default="text/csv;charset=utf-8",
        description="Media type offered with the download"
    )

    @field_validator('file_extension')
    @classmethod
    def strip_leading_dot(cls, v: str) -> str:
        """Accept both 'csv' and '.csv'."""
        v = v.strip().lstrip(".")
        if not v:
            raise ValueError("File extension cannot be empty")
        return v


class SyncSettings(BaseSettings):
    """Simulated cloud sync configuration."""

    model_config = SettingsConfigDict(
        env_prefix="POCKET_LEDGER_SYNC_",
        extra="ignore"
    )

    delay_seconds: float = Field(
        default=2.0,
        ge=0.0,
        le=60.0,
        description="How long the simulated sync takes"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    # Display
    currency_symbol: str = Field(
        default="Rp",
        description="Currency symbol shown in the UI (display only)"
    )
    year_window: int = Field(
        default=5,
        ge=0,
        le=50,
        description="Years offered before and after the current one"
    )

    # Validation warning thresholds (never block an entry)
    max_transaction_amount: float = Field(
        default=1_000_000_000.0,
        gt=0,
        description="Amounts above this get a 'please verify' warning"
    )
    future_date_tolerance_days: int = Field(
        default=31,
        ge=0,
        description="How many days in the future a transaction date can be without a warning"
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
    def export(self) -> ExportSettings:
        return ExportSettings()

    @property
    def sync(self) -> SyncSettings:
        return SyncSettings()

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

    Returns a dict of {setting_name: is_valid}, plus
    {setting_name}_error entries for the sections that failed.
    """
    results = {}

    settings = get_settings()

    for name in ("storage", "export", "sync", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
