"""Logging configuration and structured violation logging.

The validation framework never writes output itself. Callers configure
logging once with setup_logging() and pass ValidationOutcome data to
log_outcome() when they want findings in the log.
"""

import logging
import sys
from typing import TYPE_CHECKING

from adms.core.config import Settings, get_settings

if TYPE_CHECKING:
    from adms.application.validation.violations import ValidationOutcome

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(settings: Settings | None = None) -> None:
    """Configure application-wide logging.

    Level is DEBUG when settings.debug is True, otherwise settings.log_level.
    Output goes to stdout.

    Args:
        settings: Optional settings; defaults to get_settings().
    """
    settings = settings or get_settings()
    log_level = (
        logging.DEBUG
        if settings.debug
        else logging.getLevelName(settings.log_level.upper())
    )
    if not isinstance(log_level, int):
        log_level = logging.INFO
    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name.

    Args:
        name: Usually __name__ of the calling module.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)


def log_outcome(
    logger: logging.Logger,
    outcome: "ValidationOutcome",
    aggregate_name: str,
) -> int:
    """Emit one record per violation: WARNING for blocking, INFO for advisory.

    Args:
        logger: Target logger.
        outcome: Validation outcome to log.
        aggregate_name: Label for the validated aggregate (e.g. 'DocumentDto').

    Returns:
        Number of records emitted.
    """
    for violation in outcome:
        level = logging.WARNING if violation.is_blocking else logging.INFO
        logger.log(
            level,
            "%s %s [%s]: %s",
            aggregate_name,
            violation.kind.value,
            ", ".join(violation.field_path) or "-",
            violation.message,
        )
    return len(outcome)
