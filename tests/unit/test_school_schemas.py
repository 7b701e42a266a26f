"""Unit tests for the form-boundary schemas and entity models."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from app.models.enums import StudentLevel
from app.schemas.school import (
    Student,
    StudentCreate,
    StudentUpdate,
    Subject,
    SubjectCreate,
    SubjectUpdate,
    TeacherCreate,
)


def test_student_create_valid():
    data = StudentCreate(
        first_name="  Alice ",
        last_name="Martin",
        email="alice@school.edu",
        level="Year 2",
    )
    assert data.first_name == "Alice"
    assert data.level is StudentLevel.YEAR_2
    assert data.student_number is None


def test_student_create_rejects_unknown_level():
    with pytest.raises(ValidationError):
        StudentCreate(first_name="Al", last_name="Ma", email="a@school.edu", level="Year 6")


def test_student_create_rejects_short_names_and_bad_email():
    with pytest.raises(ValidationError) as exc:
        StudentCreate(first_name="A", last_name="M", email="not-an-email", level="Year 1")
    fields = {error["loc"][0] for error in exc.value.errors()}
    assert fields == {"first_name", "last_name", "email"}


def test_student_update_partial():
    data = StudentUpdate(level=StudentLevel.YEAR_4)
    assert data.model_dump(exclude_unset=True) == {"level": StudentLevel.YEAR_4}


def test_teacher_create_requires_specialization():
    with pytest.raises(ValidationError):
        TeacherCreate(first_name="Sarah", last_name="Johnson", email="s@school.edu", specialization="")


@pytest.mark.parametrize("coefficient", [0, 11, -3])
def test_subject_coefficient_bounds(coefficient):
    with pytest.raises(ValidationError):
        SubjectCreate(name="Calculus", code="MATH101", coefficient=coefficient, teacher_id="t-1")


def test_subject_coefficient_accepts_range_edges():
    assert SubjectCreate(name="Calculus", code="MATH101", coefficient=1, teacher_id="t-1").coefficient == 1
    assert SubjectCreate(name="Calculus", code="MATH101", coefficient=10, teacher_id="t-1").coefficient == 10


def test_subject_create_requires_teacher_selection():
    with pytest.raises(ValidationError):
        SubjectCreate(name="Calculus", code="MATH101", coefficient=4, teacher_id="")
    with pytest.raises(ValidationError):
        SubjectCreate(name="Calculus", code="MATH101", coefficient=4)


def test_subject_code_length():
    with pytest.raises(ValidationError):
        SubjectCreate(name="Calculus", code="MA", coefficient=4, teacher_id="t-1")
    with pytest.raises(ValidationError):
        SubjectUpdate(code="X" * 21)


def test_subject_entity_allows_unassigned_teacher():
    subject = Subject(id="s-1", name="Art", code="ART100", coefficient=2, created_at=datetime(2026, 1, 1))
    assert subject.teacher_id is None


def test_entity_created_at_normalized_to_naive_utc():
    aware = datetime(2026, 1, 1, 10, 0, tzinfo=timezone(timedelta(hours=2)))
    student = Student(
        id="s-1",
        first_name="Alice",
        last_name="Martin",
        email="alice@school.edu",
        student_number="2026-001",
        level="Year 1",
        created_at=aware,
    )
    assert student.created_at == datetime(2026, 1, 1, 8, 0)
    assert student.created_at.tzinfo is None


def test_entity_is_frozen_and_coerces_id():
    subject = Subject(id=42, name="Art", code="ART100", coefficient=2, created_at=datetime(2026, 1, 1))
    assert subject.id == "42"
    with pytest.raises(ValidationError):
        subject.coefficient = 5
