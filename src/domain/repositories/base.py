"""Caller-boundary repository interfaces.

Repository[TRequest, TResponse] is what a transport layer (controllers,
FastAPI handlers) depends on. Concrete implementations live in
src/infrastructure/persistence/repositories/ and are wired at the
application boundary.

Design notes:
  - Only plain data shapes cross this boundary: request payloads in,
    read projections and CommandResponse out. No ORM rows or sessions.
  - item() and edit() return None for a missing record; that is "nothing to
    show", not a failure.
  - create(), update() and delete() never raise for business-rule
    violations or missing records; they return CommandResponse.error().
  - AsyncRepository mirrors Repository for the async session surface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from src.domain.models.responses import CommandResponse, Request, Response

TRequest = TypeVar("TRequest", bound=Request)
TResponse = TypeVar("TResponse", bound=Response)


class Repository(ABC, Generic[TRequest, TResponse]):
    """Blocking list/item/edit/create/update/delete contract."""

    @abstractmethod
    def list(self) -> list[TResponse]:
        """Return every record as a read projection, ordered by id."""

    @abstractmethod
    def item(self, id: int) -> TResponse | None:
        """Return the read projection for id, or None if not found."""

    @abstractmethod
    def edit(self, id: int) -> TRequest | None:
        """Return the editable request shape for id, or None if not found."""

    @abstractmethod
    def create(self, request: TRequest) -> CommandResponse:
        """Validate and persist a new record."""

    @abstractmethod
    def update(self, request: TRequest) -> CommandResponse:
        """Validate and overwrite every field of the record request.id."""

    @abstractmethod
    def delete(self, id: int) -> CommandResponse:
        """Remove the record with the given id."""


class AsyncRepository(ABC, Generic[TRequest, TResponse]):
    """Async counterpart of Repository; same semantics per method."""

    @abstractmethod
    async def list(self) -> list[TResponse]:
        """Return every record as a read projection, ordered by id."""

    @abstractmethod
    async def item(self, id: int) -> TResponse | None:
        """Return the read projection for id, or None if not found."""

    @abstractmethod
    async def edit(self, id: int) -> TRequest | None:
        """Return the editable request shape for id, or None if not found."""

    @abstractmethod
    async def create(self, request: TRequest) -> CommandResponse:
        """Validate and persist a new record."""

    @abstractmethod
    async def update(self, request: TRequest) -> CommandResponse:
        """Validate and overwrite every field of the record request.id."""

    @abstractmethod
    async def delete(self, id: int) -> CommandResponse:
        """Remove the record with the given id."""
