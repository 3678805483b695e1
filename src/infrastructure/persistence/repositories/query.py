"""Composable read handles over one entity type.

Query (blocking Session) and AsyncQuery (AsyncSession) wrap a SQLAlchemy
Select together with the session that will run it and a TrackingMode.
Composition methods return new handles and never touch the database; only
the terminal methods (all, first, one_or_none, get, rows, exists, count)
execute.

Tracking:
  - TRACKED handles return the session's own identity-mapped instances, so
    an in-place mutation is written by the next commit.
  - NO_TRACKING handles load through a short-lived reader session sharing
    the owning session's connection and transaction. Results come back
    detached with every column and every eagerly loaded relationship
    populated; the owning session's identity map is never touched, so
    mutating a result never reaches the store through this session.
    Relationships that were not loaded stay unloaded; ask for them with
    options(selectinload(...)) or options(joinedload(...)).

rows() returns result rows for statements widened with add_columns(), e.g.
a parent together with a joined child entity or column.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterator
from contextlib import asynccontextmanager, contextmanager
from typing import Any, Generic, TypeVar

from sqlalchemy import Row, Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from src.domain.models.enums import TrackingMode
from src.infrastructure.persistence.models.base import Entity

TEntity = TypeVar("TEntity", bound=Entity)


class _QueryBase(Generic[TEntity]):
    def __init__(
        self,
        session: Any,
        entity_type: type[TEntity],
        tracking: TrackingMode = TrackingMode.NO_TRACKING,
        statement: Select | None = None,
    ) -> None:
        self._session = session
        self.entity_type = entity_type
        self.tracking = TrackingMode(tracking)
        self.statement: Select = statement if statement is not None else select(entity_type)

    def _derive(self, statement: Select):
        return type(self)(self._session, self.entity_type, self.tracking, statement)

    # ------------------------------------------------------------------ #
    # Composition                                                          #
    # ------------------------------------------------------------------ #

    def where(self, *criteria: Any):
        return self._derive(self.statement.where(*criteria))

    def filter_by(self, **kwargs: Any):
        return self._derive(self.statement.filter_by(**kwargs))

    def order_by(self, *clauses: Any):
        return self._derive(self.statement.order_by(*clauses))

    def join(self, target: Any, onclause: Any = None, *, isouter: bool = False):
        return self._derive(self.statement.join(target, onclause, isouter=isouter))

    def outerjoin(self, target: Any, onclause: Any = None):
        return self.join(target, onclause, isouter=True)

    def options(self, *options: Any):
        """Attach loader options such as selectinload(Parent.children)."""
        return self._derive(self.statement.options(*options))

    def add_columns(self, *entities: Any):
        """Widen the select with more entities or columns; read them with rows()."""
        return self._derive(self.statement.add_columns(*entities))

    def distinct(self):
        return self._derive(self.statement.distinct())

    def limit(self, limit: int):
        return self._derive(self.statement.limit(limit))

    def offset(self, offset: int):
        return self._derive(self.statement.offset(offset))

    def subquery(self, name: str | None = None):
        """Expose the statement as a subquery for use inside another handle's join."""
        return self.statement.subquery(name)

    # ------------------------------------------------------------------ #
    # Materialization helpers                                              #
    # ------------------------------------------------------------------ #

    def _by_id(self, id: int) -> Select:
        return self.statement.where(self.entity_type.id == id).limit(1)

    def _exists_statement(self) -> Select:
        return select(self.statement.exists())

    def _count_statement(self) -> Select:
        return select(func.count()).select_from(self.statement.order_by(None).subquery())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.entity_type.__name__}, {self.tracking.value})"


class Query(_QueryBase[TEntity]):
    """Read handle bound to a blocking Session."""

    _session: Session

    @contextmanager
    def _reader(self) -> Iterator[Session]:
        if self.tracking is TrackingMode.TRACKED:
            yield self._session
            return
        reader = Session(bind=self._session.connection())
        try:
            yield reader
        finally:
            reader.close()

    def all(self) -> list[TEntity]:
        with self._reader() as session:
            return list(session.scalars(self.statement).all())

    def first(self) -> TEntity | None:
        with self._reader() as session:
            return session.scalars(self.statement.limit(1)).first()

    def one_or_none(self) -> TEntity | None:
        with self._reader() as session:
            return session.scalars(self.statement).one_or_none()

    def get(self, id: int) -> TEntity | None:
        with self._reader() as session:
            return session.scalars(self._by_id(id)).first()

    def rows(self) -> list[Row[Any]]:
        with self._reader() as session:
            return list(session.execute(self.statement).all())

    def exists(self) -> bool:
        return bool(self._session.scalar(self._exists_statement()))

    def count(self) -> int:
        return self._session.scalar(self._count_statement()) or 0

    def __iter__(self) -> Iterator[TEntity]:
        return iter(self.all())


class AsyncQuery(_QueryBase[TEntity]):
    """Read handle bound to an AsyncSession; terminal methods are coroutines."""

    _session: AsyncSession

    @asynccontextmanager
    async def _reader(self) -> AsyncIterator[AsyncSession]:
        if self.tracking is TrackingMode.TRACKED:
            yield self._session
            return
        reader = AsyncSession(bind=await self._session.connection())
        try:
            yield reader
        finally:
            await reader.close()

    async def all(self) -> list[TEntity]:
        async with self._reader() as session:
            result = await session.scalars(self.statement)
            return list(result.all())

    async def first(self) -> TEntity | None:
        async with self._reader() as session:
            result = await session.scalars(self.statement.limit(1))
            return result.first()

    async def one_or_none(self) -> TEntity | None:
        async with self._reader() as session:
            result = await session.scalars(self.statement)
            return result.one_or_none()

    async def get(self, id: int) -> TEntity | None:
        async with self._reader() as session:
            result = await session.scalars(self._by_id(id))
            return result.first()

    async def rows(self) -> list[Row[Any]]:
        async with self._reader() as session:
            result = await session.execute(self.statement)
            return list(result.all())

    async def exists(self) -> bool:
        return bool(await self._session.scalar(self._exists_statement()))

    async def count(self) -> int:
        return await self._session.scalar(self._count_statement()) or 0
