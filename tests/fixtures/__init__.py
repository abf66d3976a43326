"""Test fixtures for pytest.

This module re-exports the test model and query provider.
"""

from .catalog import SORTS, Base, Item, ItemQueries, seed_items

__all__ = [
    "SORTS",
    "Base",
    "Item",
    "ItemQueries",
    "seed_items",
]
