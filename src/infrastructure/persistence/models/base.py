"""Identity mixin shared by every persisted record.

Entity contributes the integer primary key and the opaque unique string
identifier. Concrete models combine it with the declarative Base:

    class Student(Entity, Base):
        __tablename__ = "students"

guid is assigned by the generic service at creation time and never
reassigned; it stays NULL only for rows inserted outside the service.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column


class Entity:
    """Declarative mixin: store-assigned id plus service-assigned guid."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    guid: Mapped[Optional[str]] = mapped_column(String(36), nullable=True, unique=True)
