"""Validation configuration (thresholds and policy switches).

Single source of truth for every tunable threshold the rule sets consume.
Uses pydantic-settings with .env support; values are validated at load
time so a misconfigured threshold fails on first use, not mid-validation.
"""

from datetime import UTC, datetime
from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

MEGABYTE = 1024 * 1024


class Settings(BaseSettings):
    """Validation settings loaded from environment (ADMS_ prefix) and .env.

    All settings have defaults matching the document management system's
    production policy. Tests pass an explicit Settings instance instead of
    mutating the environment.
    """

    # Logging
    debug: bool = False
    log_level: str = "INFO"

    # Temporal bounds
    future_date_tolerance_minutes: int = Field(default=5, ge=0)
    min_system_date: datetime = datetime(1980, 1, 1, tzinfo=UTC)
    max_activity_age_days: int = Field(default=3650, gt=0)
    document_review_age_days: int = Field(default=3650, gt=0)
    matter_review_age_days: int = Field(default=3650, gt=0)
    revision_review_age_days: int = Field(default=3650, gt=0)

    # File size tiers (soft tier warns, hard tier rejects)
    max_file_size_bytes: int = 100 * MEGABYTE
    large_file_warning_bytes: int = 50 * MEGABYTE
    large_transfer_threshold_bytes: int = 50 * MEGABYTE
    max_full_file_name_length: int = Field(default=255, gt=0)

    # Collection policy
    max_revisions_per_document: int = Field(default=50, gt=0)
    max_activity_count: int = Field(default=1000, gt=0)

    # Audit-trail policy
    compliance_review_business_days: int = Field(default=30, gt=0)
    maintenance_window_start_hour: int = 2
    maintenance_window_end_hour: int = 4
    business_hours_start_hour: int = 6
    business_hours_end_hour: int = 22
    counterpart_tolerance_seconds: float = Field(default=5.0, ge=0)

    # Conversion gateway
    summary_top_n: int = Field(default=5, gt=0)
    advisory_blocks_conversion: bool = False

    model_config = SettingsConfigDict(
        env_prefix="ADMS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_thresholds(self) -> "Settings":
        """Validate threshold ordering and ranges.

        - Soft file-size tier must sit below the hard tier.
        - Maintenance window and business hours must be 0-23.
        - Minimum system date is normalised to UTC.
        """
        if self.large_file_warning_bytes >= self.max_file_size_bytes:
            raise ValueError(
                "large_file_warning_bytes must be lower than max_file_size_bytes "
                f"(got {self.large_file_warning_bytes} >= {self.max_file_size_bytes})"
            )
        if self.max_file_size_bytes <= 0:
            raise ValueError("max_file_size_bytes must be positive")
        for name in (
            "maintenance_window_start_hour",
            "maintenance_window_end_hour",
            "business_hours_start_hour",
            "business_hours_end_hour",
        ):
            hour = getattr(self, name)
            if not 0 <= hour <= 23:
                raise ValueError(f"{name} must be between 0 and 23, got: {hour!r}")
        if self.min_system_date.tzinfo is None:
            self.min_system_date = self.min_system_date.replace(tzinfo=UTC)
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached validation settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() after overriding ADMS_* env vars.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
