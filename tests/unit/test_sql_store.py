"""Unit tests for the SQLAlchemy record store (in-memory SQLite)."""

import pytest

from app.core.errors import CollaboratorUnavailable, RecordNotFound, ValidationFailed
from app.models.enums import StudentLevel
from app.models.school import StudentRecord

STUDENT_FIELDS = {
    "first_name": "Alice",
    "last_name": "Martin",
    "email": "alice@school.edu",
    "student_number": "2026-001",
    "level": StudentLevel.YEAR_2,
}


async def test_create_and_get(database_stores):
    student = await database_stores.students.create(STUDENT_FIELDS)
    assert len(student.id) == 36
    assert student.level is StudentLevel.YEAR_2

    fetched = await database_stores.students.get(student.id)
    assert fetched == student


async def test_list_returns_all_records(database_stores):
    first = await database_stores.students.create(STUDENT_FIELDS)
    second = await database_stores.students.create({**STUDENT_FIELDS, "student_number": "2026-002"})
    listed = await database_stores.students.list()
    assert {s.id for s in listed} == {first.id, second.id}


async def test_update_keeps_created_at(database_stores):
    student = await database_stores.students.create(STUDENT_FIELDS)
    updated = await database_stores.students.update(
        student.id, {"last_name": "Dupont", "created_at": "2000-01-01T00:00:00"}
    )
    assert updated.last_name == "Dupont"
    assert updated.created_at == student.created_at
    assert updated.first_name == "Alice"


async def test_missing_record_raises_not_found(database_stores):
    with pytest.raises(RecordNotFound):
        await database_stores.teachers.get("missing")
    with pytest.raises(RecordNotFound):
        await database_stores.teachers.update("missing", {"specialization": "Art"})
    with pytest.raises(RecordNotFound):
        await database_stores.teachers.delete("missing")


async def test_delete(database_stores):
    teacher = await database_stores.teachers.create({
        "first_name": "Sarah",
        "last_name": "Johnson",
        "email": "sarah@school.edu",
        "specialization": "Mathematics",
    })
    await database_stores.teachers.delete(teacher.id)
    assert await database_stores.teachers.list() == []


async def test_unique_student_number_violation(database_stores):
    await database_stores.students.create(STUDENT_FIELDS)
    with pytest.raises(ValidationFailed):
        await database_stores.students.create({**STUDENT_FIELDS, "email": "other@school.edu"})
    assert len(await database_stores.students.list()) == 1


async def test_coefficient_constraint(database_stores):
    with pytest.raises(ValidationFailed):
        await database_stores.subjects.create({"name": "Calculus", "code": "MATH101", "coefficient": 11})


async def test_subject_may_reference_missing_teacher(database_stores):
    subject = await database_stores.subjects.create({
        "name": "Calculus",
        "code": "MATH101",
        "coefficient": 4,
        "teacher_id": "deleted-teacher",
    })
    assert subject.teacher_id == "deleted-teacher"


async def test_malformed_stored_row_is_a_store_fault(database_stores):
    async with database_stores.students._session_factory() as session:
        session.add(StudentRecord(**{**STUDENT_FIELDS, "level": "Year 9"}))
        await session.commit()

    with pytest.raises(CollaboratorUnavailable):
        await database_stores.students.list()


async def test_invalid_write_is_not_persisted(database_stores):
    with pytest.raises(ValidationFailed):
        await database_stores.students.create({**STUDENT_FIELDS, "level": "Year 9"})
    assert await database_stores.students.list() == []
