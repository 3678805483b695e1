"""Concrete SQLAlchemy services.

Exports the generic service base, the student services, and factory
functions for wiring at the application boundary. Each service owns the
session it is built with and releases it when its scope exits.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator, Iterator
from contextlib import contextmanager

from src.infrastructure.database import AsyncSessionLocal, SessionLocal

from .base import AsyncService, Service, ServiceDisposedError
from .query import AsyncQuery, Query
from .students import AsyncStudentService, StudentService


@contextmanager
def student_service() -> Iterator[StudentService]:
    """Blocking StudentService bound to a fresh session:

        with student_service() as service:
            students = service.list()
    """
    with StudentService(SessionLocal()) as service:
        yield service


async def get_student_service() -> AsyncGenerator[AsyncStudentService, None]:
    """AsyncStudentService bound to a fresh session.

    Intended for use as a FastAPI dependency:

        async def handler(
            service: AsyncStudentService = Depends(get_student_service),
        ) -> ...:
            response = await service.create(request)
    """
    async with AsyncStudentService(AsyncSessionLocal()) as service:
        yield service


__all__ = [
    "Service",
    "AsyncService",
    "ServiceDisposedError",
    "Query",
    "AsyncQuery",
    "StudentService",
    "AsyncStudentService",
    "student_service",
    "get_student_service",
]
