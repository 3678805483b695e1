"""SQLAlchemy student services: blocking and async implementations of the
student Repository contract on top of the generic service base."""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal

from src.domain.models.enums import TrackingMode
from src.domain.models.responses import CommandResponse
from src.domain.models.students import StudentRequest, StudentResponse
from src.domain.repositories.base import AsyncRepository, Repository
from src.infrastructure.persistence.models.students import Student

from .base import AsyncService, Service

logger = logging.getLogger(__name__)

DUPLICATE_MESSAGE = "Student with same name and surname exist"
NOT_FOUND_MESSAGE = "Student not found."

BIRTH_DATE_FORMAT = "%m/%d/%Y %H:%M:%S"
GRADE_STEP = Decimal("0.1")


def _format_grade(grade: Decimal | None) -> str:
    """One decimal place with thousands separators, midpoints rounded up."""
    if grade is None:
        return ""
    return f"{grade.quantize(GRADE_STEP, rounding=ROUND_HALF_UP):,.1f}"


def _to_response(row: Student) -> StudentResponse:
    return StudentResponse(
        id=row.id,
        guid=row.guid,
        name=row.name,
        surname=row.surname,
        birth_date=row.birth_date,
        overall_grade=row.overall_grade,
        is_graduated=row.is_graduated,
        full_name=f"{row.name} {row.surname}",
        birth_date_f=row.birth_date.strftime(BIRTH_DATE_FORMAT),
        overall_grade_f=_format_grade(row.overall_grade),
        is_graduated_f="Graduated" if row.is_graduated else "Not Graduaded",
    )


def _to_request(row: Student) -> StudentRequest:
    return StudentRequest(
        id=row.id,
        name=row.name,
        surname=row.surname,
        birth_date=row.birth_date,
        overall_grade=row.overall_grade,
        is_graduated=row.is_graduated,
    )


def _apply(request: StudentRequest, row: Student) -> Student:
    """Overwrite every editable field of row from request."""
    row.name = request.name
    row.surname = request.surname
    row.birth_date = request.birth_date
    row.overall_grade = request.overall_grade
    row.is_graduated = request.is_graduated
    return row


def _same_name(request: StudentRequest):
    return (
        Student.name == request.name,
        Student.surname == request.surname,
    )


class StudentService(Service[Student], Repository[StudentRequest, StudentResponse]):
    entity_type = Student

    def list(self) -> list[StudentResponse]:
        return [_to_response(row) for row in self.query().order_by(Student.id)]

    def item(self, id: int) -> StudentResponse | None:
        row = self.query().get(id)
        return _to_response(row) if row else None

    def edit(self, id: int) -> StudentRequest | None:
        row = self.query().get(id)
        return _to_request(row) if row else None

    def create(self, request: StudentRequest) -> CommandResponse:
        if self.query().where(*_same_name(request)).exists():
            logger.info("Rejected duplicate student %s %s", request.name, request.surname)
            return CommandResponse.error(DUPLICATE_MESSAGE)
        entity = self.create_entity(_apply(request, Student()))
        return CommandResponse.success("Student created successfully.", entity.id)

    def update(self, request: StudentRequest) -> CommandResponse:
        if self.query().where(Student.id != request.id, *_same_name(request)).exists():
            logger.info("Rejected duplicate student %s %s", request.name, request.surname)
            return CommandResponse.error(DUPLICATE_MESSAGE)
        entity = self.query(TrackingMode.TRACKED).get(request.id)
        if entity is None:
            return CommandResponse.error(NOT_FOUND_MESSAGE)
        self.update_entity(_apply(request, entity))
        return CommandResponse.success("Student updated successfully.", entity.id)

    def delete(self, id: int) -> CommandResponse:
        entity = self.query(TrackingMode.TRACKED).get(id)
        if entity is None:
            return CommandResponse.error(NOT_FOUND_MESSAGE)
        self.delete_entity(entity)
        return CommandResponse.success("Student deleted successfully.", id)


class AsyncStudentService(AsyncService[Student], AsyncRepository[StudentRequest, StudentResponse]):
    entity_type = Student

    async def list(self) -> list[StudentResponse]:
        rows = await self.query().order_by(Student.id).all()
        return [_to_response(row) for row in rows]

    async def item(self, id: int) -> StudentResponse | None:
        row = await self.query().get(id)
        return _to_response(row) if row else None

    async def edit(self, id: int) -> StudentRequest | None:
        row = await self.query().get(id)
        return _to_request(row) if row else None

    async def create(self, request: StudentRequest) -> CommandResponse:
        if await self.query().where(*_same_name(request)).exists():
            logger.info("Rejected duplicate student %s %s", request.name, request.surname)
            return CommandResponse.error(DUPLICATE_MESSAGE)
        entity = await self.create_entity(_apply(request, Student()))
        return CommandResponse.success("Student created successfully.", entity.id)

    async def update(self, request: StudentRequest) -> CommandResponse:
        if await self.query().where(Student.id != request.id, *_same_name(request)).exists():
            logger.info("Rejected duplicate student %s %s", request.name, request.surname)
            return CommandResponse.error(DUPLICATE_MESSAGE)
        entity = await self.query(TrackingMode.TRACKED).get(request.id)
        if entity is None:
            return CommandResponse.error(NOT_FOUND_MESSAGE)
        await self.update_entity(_apply(request, entity))
        return CommandResponse.success("Student updated successfully.", entity.id)

    async def delete(self, id: int) -> CommandResponse:
        entity = await self.query(TrackingMode.TRACKED).get(id)
        if entity is None:
            return CommandResponse.error(NOT_FOUND_MESSAGE)
        await self.delete_entity(entity)
        return CommandResponse.success("Student deleted successfully.", id)
