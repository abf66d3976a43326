"""Cached settings loaders.

Each loader builds its settings once per process. Tests that change
environment variables call ``clear_all_caches()`` afterwards.
"""

from __future__ import annotations

from functools import lru_cache

from .logging_ import LoggingSettings
from .pagination import PaginationSettings


@lru_cache(maxsize=1)
def get_pagination_settings() -> PaginationSettings:
    """Get cached pagination settings.

    Returns:
        Validated and frozen PaginationSettings instance.
    """
    return PaginationSettings()


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """Get cached logging settings.

    Returns:
        Validated and frozen LoggingSettings instance.
    """
    return LoggingSettings()


def clear_all_caches() -> None:
    """Drop every cached settings instance."""
    get_pagination_settings.cache_clear()
    get_logging_settings.cache_clear()
