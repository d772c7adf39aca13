"""Shared utilities: UTC datetime helpers."""

from adms.shared.utils.datetime import (
    age_in_days,
    business_days_between,
    ensure_utc,
    in_hour_window,
    is_top_of_hour,
    is_unset,
    is_weekend,
    utc_now,
)

__all__ = [
    "utc_now",
    "ensure_utc",
    "is_unset",
    "age_in_days",
    "business_days_between",
    "is_top_of_hour",
    "is_weekend",
    "in_hour_window",
]
