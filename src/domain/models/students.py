"""Student request and read-projection shapes."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import Field, StringConstraints

from .responses import Request, Response

# Required text: surrounding whitespace is stripped before the length checks.
PersonName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]


class StudentRequest(Request):
    """Editable student payload, used for create, update and the edit form.

    Name and surname are trimmed on validation, so the uniqueness check and
    the stored row both see the trimmed values and a whitespace-only name is
    rejected.
    """

    name: PersonName
    surname: PersonName
    birth_date: datetime
    overall_grade: Decimal | None = Field(default=None, ge=0, le=100)
    is_graduated: bool = False


class StudentResponse(Response):
    """Display projection of a student.

    The *_f fields are preformatted strings for presentation:
        full_name        "Ada Lovelace"
        birth_date_f     "10/25/2025 13:30:45"
        overall_grade_f  "95.5"  (empty when no grade is recorded)
        is_graduated_f   "Graduated" / "Not Graduaded"
    """

    name: str
    surname: str
    birth_date: datetime
    overall_grade: Decimal | None = None
    is_graduated: bool

    full_name: str
    birth_date_f: str
    overall_grade_f: str
    is_graduated_f: str
