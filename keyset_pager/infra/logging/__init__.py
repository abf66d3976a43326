"""Logging infrastructure.

Basic usage:
    import logging

    from keyset_pager.infra.logging import get_lazy_logger, setup_logging

    setup_logging()  # reads LOG_* settings

    logger = get_lazy_logger(__name__)
    logger.debug(lambda: f"Expensive: {compute_heavy_data()}")  # only runs if DEBUG enabled
"""

from keyset_pager.infra.logging.config import configure_logging, setup_logging
from keyset_pager.infra.logging.formatters import JSONFormatter
from keyset_pager.infra.logging.lazy import LazyLoggerAdapter, LazyString, get_lazy_logger

__all__ = [
    "JSONFormatter",
    "LazyLoggerAdapter",
    "LazyString",
    "configure_logging",
    "get_lazy_logger",
    "setup_logging",
]
