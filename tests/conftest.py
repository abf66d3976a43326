"""Pytest configuration and shared fixtures.

Organization:
    - Settings Fixtures: environment isolation for pydantic-settings
    - Database Fixtures: in-memory SQLite (sync and async) seeded with items
    - Pagination Fixtures: query provider and configs bound to a session
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator, Generator

import pytest
from sqlalchemy import Engine, create_engine
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from keyset_pager.core.pagination import (
    AsyncSessionExecutor,
    PaginationConfig,
    SessionExecutor,
)
from keyset_pager.core.settings import clear_all_caches
from tests.fixtures import Base, ItemQueries, seed_items

# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Drop PAGINATION_/LOG_ variables and cached settings around each test."""
    for key in list(os.environ):
        if key.startswith(("PAGINATION_", "LOG_")):
            monkeypatch.delenv(key, raising=False)
    clear_all_caches()
    yield
    clear_all_caches()


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
def db_engine() -> Generator[Engine]:
    """In-memory SQLite engine with the items table created and seeded."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    with Session(engine) as session:
        session.add_all(seed_items())
        session.commit()

    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def db_session(db_engine: Engine) -> Generator[Session]:
    """Session over the seeded in-memory database."""
    with Session(db_engine) as session:
        yield session


@pytest.fixture
async def async_db_engine() -> AsyncGenerator[AsyncEngine]:
    """Async in-memory SQLite engine (aiosqlite), created and seeded."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async with AsyncSession(engine) as session:
        session.add_all(seed_items())
        await session.commit()

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
async def async_db_session(async_db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Async session over the seeded in-memory database."""
    async with AsyncSession(async_db_engine, expire_on_commit=False) as session:
        yield session


# ============================================================================
# Pagination Fixtures
# ============================================================================


@pytest.fixture
def item_queries() -> ItemQueries:
    return ItemQueries()


@pytest.fixture
def pagination_config(db_session: Session, item_queries: ItemQueries) -> PaginationConfig:
    """Config paginating items through the sync session, max_limit=10."""
    return PaginationConfig(
        queries=item_queries,
        executor=SessionExecutor(db_session),
        max_limit=10,
    )


@pytest.fixture
def async_pagination_config(
    async_db_session: AsyncSession, item_queries: ItemQueries
) -> PaginationConfig:
    """Config paginating items through the async session, max_limit=10."""
    return PaginationConfig(
        queries=item_queries,
        executor=AsyncSessionExecutor(async_db_session),
        max_limit=10,
    )
