"""Student ORM model."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import Boolean, DateTime, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.database import Base
from src.infrastructure.persistence.models.base import Entity


class Student(Entity, Base):
    """Student record.

    (name, surname) uniqueness is checked by StudentService before any write;
    uq_students_name_surname backs that check up against concurrent sessions.
    """

    __tablename__ = "students"
    __table_args__ = (
        UniqueConstraint("name", "surname", name="uq_students_name_surname"),
    )

    name: Mapped[str] = mapped_column(String(50), nullable=False)
    surname: Mapped[str] = mapped_column(String(50), nullable=False)
    birth_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    overall_grade: Mapped[Optional[Decimal]] = mapped_column(Numeric(5, 2), nullable=True)
    is_graduated: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return f"Student(id={self.id!r}, name={self.name!r}, surname={self.surname!r})"
