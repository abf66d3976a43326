"""Pagination settings.

Environment variables use PAGINATION_ prefix.
Example: PAGINATION_MAX_LIMIT=100, PAGINATION_CURSOR_MAX_LENGTH=4096
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PaginationSettings(BaseSettings):
    """Pagination configuration settings.

    Attributes:
        max_limit: Largest ``first``/``last`` a caller may request unless
            the call supplies its own ``max_limit``.
        cursor_max_length: Longest cursor token accepted; longer tokens
            are rejected as malformed before decoding.

    Example:
        settings = PaginationSettings()
        config = PaginationConfig.from_settings(queries, executor, settings)
    """

    max_limit: int = Field(
        default=100,
        ge=1,
        le=10000,
        description="Maximum allowed page size",
    )
    cursor_max_length: int = Field(
        default=4096,
        ge=16,
        le=65536,
        description="Maximum accepted cursor token length",
    )

    model_config = SettingsConfigDict(
        env_prefix="PAGINATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )
