"""ORM model registry: imports every model module so each mapper class is
registered with Base.metadata before Alembic or SQLAlchemy runs.
"""

from src.infrastructure.persistence.models.base import Entity
from src.infrastructure.persistence.models.students import Student

__all__ = [
    "Entity",
    "Student",
]
