"""Tests for src/domain/models/students.py."""

from datetime import datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from src.domain.models.students import StudentRequest, StudentResponse


def _request(**overrides):
    defaults = dict(
        name="Ada",
        surname="Lovelace",
        birth_date=datetime(1815, 12, 10, 8, 30),
    )
    defaults.update(overrides)
    return StudentRequest(**defaults)


def test_request_defaults():
    request = _request()
    assert request.id == 0
    assert request.overall_grade is None
    assert request.is_graduated is False


def test_request_trims_name_and_surname():
    request = _request(name="  Ada ", surname="\tLovelace ")
    assert (request.name, request.surname) == ("Ada", "Lovelace")


def test_request_rejects_whitespace_only_name():
    with pytest.raises(ValidationError):
        _request(name="   ")


def test_request_rejects_whitespace_only_surname():
    with pytest.raises(ValidationError):
        _request(surname="\t ")


def test_request_length_is_checked_after_trimming():
    assert _request(name=" " + "x" * 50 + " ").name == "x" * 50


def test_request_rejects_empty_name():
    with pytest.raises(ValidationError):
        _request(name="")


def test_request_rejects_name_longer_than_50():
    with pytest.raises(ValidationError):
        _request(surname="x" * 51)


def test_request_accepts_name_of_exactly_50():
    assert len(_request(name="x" * 50).name) == 50


def test_request_coerces_grade_to_decimal():
    assert _request(overall_grade="95.5").overall_grade == Decimal("95.5")


def test_request_rejects_grade_above_100():
    with pytest.raises(ValidationError):
        _request(overall_grade=Decimal("100.5"))


def test_response_requires_display_fields():
    with pytest.raises(ValidationError):
        StudentResponse(
            id=1,
            name="Ada",
            surname="Lovelace",
            birth_date=datetime(1815, 12, 10),
            is_graduated=False,
        )
