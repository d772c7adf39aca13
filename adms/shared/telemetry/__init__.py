"""Telemetry: logging setup."""

from adms.shared.telemetry.logging import get_logger, log_outcome, setup_logging

__all__ = ["get_logger", "log_outcome", "setup_logging"]
