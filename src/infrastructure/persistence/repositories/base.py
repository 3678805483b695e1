"""Generic SQLAlchemy service base.

Service[TEntity] and AsyncService[TEntity] are the reusable data-access
layer every concrete domain service specializes. They share one contract:

    query(tracking)          composable read handle over TEntity
    save()                   commit pending registrations, return entry count
    create_entity(e, save)   assign a fresh guid, register an insert
    update_entity(e, save)   register the complete state of an existing row
    delete_entity(e, save)   register removal by identity
    query_related(T)         no-tracking read handle over another entity type
    delete_related(list)     register a batch removal, never commits
    close()                  release the session exactly once

Service runs on a blocking Session; AsyncService runs on an AsyncSession and
its store round-trips are coroutines. Cancelling an AsyncService commit
rolls the session back and lets asyncio.CancelledError propagate.

Each instance owns its session: use it as a context manager so the session
is released on every exit path.

    with StudentService(SessionLocal()) as service:
        service.create(request)

Storage faults (IntegrityError, OperationalError, ...) are not translated
here. A failed commit is rolled back so the session stays usable, then the
original exception propagates.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from types import TracebackType
from typing import Any, ClassVar, Generic, TypeVar
from uuid import uuid4

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from src.domain.models.enums import TrackingMode
from src.infrastructure.persistence.models.base import Entity

from .query import AsyncQuery, Query

logger = logging.getLogger(__name__)

TEntity = TypeVar("TEntity", bound=Entity)
TRelated = TypeVar("TRelated", bound=Entity)


class ServiceDisposedError(RuntimeError):
    """Raised when a service is used after its session has been released."""


def _pending_entries(session: Session | AsyncSession) -> int:
    """Number of rows the next flush will insert, update or delete."""
    modified = sum(1 for obj in session.dirty if session.is_modified(obj))
    return len(session.new) + modified + len(session.deleted)


def _require_identity(entity: Entity) -> None:
    if entity.id is None:
        raise ValueError(f"{type(entity).__name__} has no id; it was never persisted")


class _ServiceBase(Generic[TEntity]):
    entity_type: ClassVar[type[Any]]

    def __init__(self, session: Any) -> None:
        self._db = session
        self._disposed = False

    @property
    def _session(self) -> Any:
        if self._disposed:
            raise ServiceDisposedError(f"{type(self).__name__} has been disposed")
        return self._db

    @property
    def disposed(self) -> bool:
        return self._disposed

    @staticmethod
    def _assign_guid(entity: Entity) -> None:
        entity.guid = str(uuid4())


class Service(_ServiceBase[TEntity]):
    """Blocking generic repository over a SQLAlchemy Session."""

    def __init__(self, session: Session) -> None:
        super().__init__(session)

    # ------------------------------------------------------------------ #
    # Entity operations                                                    #
    # ------------------------------------------------------------------ #

    def query(self, tracking: TrackingMode = TrackingMode.NO_TRACKING) -> Query[TEntity]:
        return Query(self._session, self.entity_type, tracking)

    def save(self) -> int:
        session: Session = self._session
        count = _pending_entries(session)
        try:
            session.commit()
        except SQLAlchemyError:
            session.rollback()
            raise
        logger.debug("%s committed %d entries", type(self).__name__, count)
        return count

    def create_entity(self, entity: TEntity, save: bool = True) -> TEntity:
        self._assign_guid(entity)
        self._session.add(entity)
        if save:
            self.save()
        return entity

    def update_entity(self, entity: TEntity, save: bool = True) -> TEntity:
        _require_identity(entity)
        entity = self._attach(entity)
        if save:
            self.save()
        return entity

    def delete_entity(self, entity: TEntity, save: bool = True) -> None:
        _require_identity(entity)
        self._session.delete(self._attach(entity))
        if save:
            self.save()

    # ------------------------------------------------------------------ #
    # Relational operations                                                #
    # ------------------------------------------------------------------ #

    def query_related(self, entity_type: type[TRelated]) -> Query[TRelated]:
        return Query(self._session, entity_type, TrackingMode.NO_TRACKING)

    def delete_related(self, entities: Iterable[TRelated]) -> None:
        """Register removals only; the caller commits with save()."""
        session: Session = self._session
        for entity in entities:
            session.delete(self._attach(entity))

    # ------------------------------------------------------------------ #
    # Lifecycle                                                            #
    # ------------------------------------------------------------------ #

    def _attach(self, entity: Any) -> Any:
        session: Session = self._session
        if entity in session:
            return entity
        return session.merge(entity)

    def close(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        self._db.close()

    def __enter__(self) -> Service[TEntity]:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class AsyncService(_ServiceBase[TEntity]):
    """Async generic repository over a SQLAlchemy AsyncSession."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    # ------------------------------------------------------------------ #
    # Entity operations                                                    #
    # ------------------------------------------------------------------ #

    def query(self, tracking: TrackingMode = TrackingMode.NO_TRACKING) -> AsyncQuery[TEntity]:
        return AsyncQuery(self._session, self.entity_type, tracking)

    async def save(self) -> int:
        session: AsyncSession = self._session
        count = _pending_entries(session)
        try:
            await session.commit()
        except asyncio.CancelledError:
            logger.warning("%s commit cancelled; rolling back", type(self).__name__)
            await session.rollback()
            raise
        except SQLAlchemyError:
            await session.rollback()
            raise
        logger.debug("%s committed %d entries", type(self).__name__, count)
        return count

    async def create_entity(self, entity: TEntity, save: bool = True) -> TEntity:
        self._assign_guid(entity)
        self._session.add(entity)
        if save:
            await self.save()
        return entity

    async def update_entity(self, entity: TEntity, save: bool = True) -> TEntity:
        _require_identity(entity)
        entity = await self._attach(entity)
        if save:
            await self.save()
        return entity

    async def delete_entity(self, entity: TEntity, save: bool = True) -> None:
        _require_identity(entity)
        await self._session.delete(await self._attach(entity))
        if save:
            await self.save()

    # ------------------------------------------------------------------ #
    # Relational operations                                                #
    # ------------------------------------------------------------------ #

    def query_related(self, entity_type: type[TRelated]) -> AsyncQuery[TRelated]:
        return AsyncQuery(self._session, entity_type, TrackingMode.NO_TRACKING)

    async def delete_related(self, entities: Iterable[TRelated]) -> None:
        """Register removals only; the caller commits with save()."""
        session: AsyncSession = self._session
        for entity in entities:
            await session.delete(await self._attach(entity))

    # ------------------------------------------------------------------ #
    # Lifecycle                                                            #
    # ------------------------------------------------------------------ #

    async def _attach(self, entity: Any) -> Any:
        session: AsyncSession = self._session
        if entity in session:
            return entity
        return await session.merge(entity)

    async def close(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        await self._db.close()

    async def __aenter__(self) -> AsyncService[TEntity]:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()
