"""Core: settings and lookup tables.

Single place for validation thresholds and shared constants.
"""

from adms.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
