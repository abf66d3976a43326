"""Statement executors.

The engine never talks to the database itself. An executor runs the
augmented statement and returns its rows, and runs COUNT queries for
``total_count``. Any object with matching ``all``/``count`` methods works;
these wrap SQLAlchemy sessions owned by the caller.

Usage:
    with Session(engine) as session:
        config = PaginationConfig(queries=UserQueries(), executor=SessionExecutor(session))
        page = paginate_or_raise(select(User), "by_name", {"first": 20}, config)
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from sqlalchemy import Select, func, select

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession
    from sqlalchemy.orm import Session


@runtime_checkable
class Executor(Protocol):
    """Runs statements synchronously."""

    def all(self, statement: Select[Any]) -> Sequence[Sequence[Any]]: ...

    def count(self, statement: Select[Any]) -> int: ...


@runtime_checkable
class AsyncExecutor(Protocol):
    """Runs statements on an event loop."""

    async def all(self, statement: Select[Any]) -> Sequence[Sequence[Any]]: ...

    async def count(self, statement: Select[Any]) -> int: ...


def count_statement(statement: Select[Any]) -> Select[tuple[int]]:
    """Wrap a statement in ``SELECT count(*)``, dropping ORDER BY and LIMIT."""
    base = statement.order_by(None).limit(None).offset(None)
    return select(func.count()).select_from(base.subquery())


class SessionExecutor:
    """Executor over a synchronous SQLAlchemy ``Session``."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def all(self, statement: Select[Any]) -> Sequence[Sequence[Any]]:
        return self.session.execute(statement).all()

    def count(self, statement: Select[Any]) -> int:
        return self.session.execute(count_statement(statement)).scalar_one()


class AsyncSessionExecutor:
    """Executor over a SQLAlchemy ``AsyncSession``."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def all(self, statement: Select[Any]) -> Sequence[Sequence[Any]]:
        result = await self.session.execute(statement)
        return result.all()

    async def count(self, statement: Select[Any]) -> int:
        result = await self.session.execute(count_statement(statement))
        return result.scalar_one()


__all__ = [
    "AsyncExecutor",
    "AsyncSessionExecutor",
    "Executor",
    "SessionExecutor",
    "count_statement",
]
