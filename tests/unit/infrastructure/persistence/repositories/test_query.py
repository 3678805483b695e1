"""Tests for Query / AsyncQuery: composition and tracking."""

from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from sqlalchemy import inspect

from src.domain.models.enums import TrackingMode
from src.infrastructure.persistence.models.students import Student
from src.infrastructure.persistence.repositories.query import AsyncQuery, Query


def _student(**overrides):
    defaults = dict(
        id=1,
        guid="0f8fad5b-d9cb-469f-a165-70867728950e",
        name="Ada",
        surname="Lovelace",
        birth_date=datetime(1815, 12, 10),
        overall_grade=Decimal("95.50"),
        is_graduated=False,
    )
    defaults.update(overrides)
    return Student(**defaults)


def _mock_session(rows):
    session = MagicMock()
    session.scalars.return_value = MagicMock(
        all=MagicMock(return_value=rows),
        first=MagicMock(return_value=rows[0] if rows else None),
    )
    return session


def _seed(session, *names):
    for i, name in enumerate(names, start=1):
        session.add(_student(id=i, guid=f"guid-{i}", name=name))
    session.commit()


# --- composition ---

def test_default_tracking_is_no_tracking():
    assert Query(MagicMock(), Student).tracking is TrackingMode.NO_TRACKING


def test_composition_does_not_execute():
    session = MagicMock()
    Query(session, Student).where(Student.name == "Ada").order_by(Student.id).limit(5)
    session.scalars.assert_not_called()
    session.scalar.assert_not_called()
    session.connection.assert_not_called()


def test_composition_returns_new_handle_and_leaves_original_untouched():
    base = Query(MagicMock(), Student)
    filtered = base.where(Student.name == "Ada")
    assert filtered is not base
    assert "WHERE" not in str(base.statement)
    assert "students.name" in str(filtered.statement)


def test_composition_keeps_tracking_mode():
    query = Query(MagicMock(), Student, TrackingMode.TRACKED).filter_by(name="Ada")
    assert query.tracking is TrackingMode.TRACKED


def test_outerjoin_builds_left_outer_join():
    other = Student.__table__.alias("other")
    query = Query(MagicMock(), Student).outerjoin(other, other.c.id == Student.id)
    assert "LEFT OUTER JOIN" in str(query.statement)


def test_add_columns_widens_the_select():
    query = Query(MagicMock(), Student).add_columns(Student.surname.label("family"))
    assert "AS family" in str(query.statement)
    assert len(query.statement.selected_columns) == len(Student.__table__.columns) + 1


# --- tracked materialization ---

def test_tracked_all_returns_session_instances():
    row = _student()
    query = Query(_mock_session([row]), Student, TrackingMode.TRACKED)
    assert query.all()[0] is row


def test_tracked_read_does_not_open_a_reader_session():
    session = _mock_session([_student()])
    Query(session, Student, TrackingMode.TRACKED).first()
    session.connection.assert_not_called()


def test_count_defaults_to_zero_when_store_returns_none():
    session = MagicMock()
    session.scalar.return_value = None
    assert Query(session, Student).count() == 0


# --- no-tracking materialization ---

def test_no_tracking_results_are_detached_and_outside_identity_map(session_factory):
    with session_factory() as session:
        _seed(session, "Ada")
        tracked = session.get(Student, 1)
        result = Query(session, Student).first()
        assert result is not tracked
        assert inspect(result).detached is True
        assert result not in session
        assert (result.name, result.overall_grade) == ("Ada", Decimal("95.50"))


def test_no_tracking_mutation_leaves_session_clean(session_factory):
    with session_factory() as session:
        _seed(session, "Ada")
        Query(session, Student).first().name = "changed"
        assert not session.dirty
        assert session.get(Student, 1).name == "Ada"


def test_first_returns_none_for_empty_result(session_factory):
    with session_factory() as session:
        assert Query(session, Student).first() is None


def test_iterating_a_query_yields_all_rows(session_factory):
    with session_factory() as session:
        _seed(session, "Ada", "Grace")
        names = [s.name for s in Query(session, Student).order_by(Student.id)]
    assert names == ["Ada", "Grace"]


def test_rows_return_entity_and_extra_column(session_factory):
    with session_factory() as session:
        _seed(session, "Ada", "Grace")
        rows = (
            Query(session, Student)
            .add_columns(Student.surname.label("family"))
            .order_by(Student.id)
            .rows()
        )
    assert [(student.name, family) for student, family in rows] == [
        ("Ada", "Lovelace"),
        ("Grace", "Lovelace"),
    ]
    assert inspect(rows[0][0]).detached is True


# --- async ---

async def test_async_get_returns_tracked_instance():
    row = _student()
    session = MagicMock()
    session.scalars = AsyncMock(return_value=MagicMock(first=MagicMock(return_value=row)))
    assert await AsyncQuery(session, Student, TrackingMode.TRACKED).get(1) is row


async def test_async_exists_coerces_to_bool():
    session = MagicMock()
    session.scalar = AsyncMock(return_value=1)
    assert await AsyncQuery(session, Student).exists() is True


async def test_async_no_tracking_first_is_detached(async_session_factory):
    async with async_session_factory() as session:
        session.add(_student())
        await session.commit()
        result = await AsyncQuery(session, Student).first()
        assert inspect(result).detached is True
        assert result.surname == "Lovelace"
        assert result not in session


async def test_async_rows_in_tracked_mode_are_session_instances(async_session_factory):
    async with async_session_factory() as session:
        session.add(_student())
        await session.commit()
        tracked = await session.get(Student, 1)
        rows = await AsyncQuery(session, Student, TrackingMode.TRACKED).add_columns(Student.id).rows()
        assert rows[0][0] is tracked
        assert rows[0][1] == 1
