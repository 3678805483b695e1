"""Persistence package.

Importing this package registers every ORM mapper with Base.metadata
(required for Alembic autogenerate and SQLAlchemy mapper configuration)
and exports the service implementations and factories.
"""

from src.infrastructure.persistence.models import *  # noqa: F401, F403
from src.infrastructure.persistence.models import __all__ as _orm_all
from src.infrastructure.persistence.repositories import (
    AsyncQuery,
    AsyncService,
    AsyncStudentService,
    Query,
    Service,
    ServiceDisposedError,
    StudentService,
    get_student_service,
    student_service,
)

__all__ = _orm_all + [
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
