"""Entity builders for tests that don't need a store."""

from datetime import datetime, timedelta
from itertools import count

from app.models.enums import StudentLevel
from app.schemas.school import Student, Subject, Teacher

BASE_TIME = datetime(2026, 1, 1, 8, 0, 0)
_ids = count(1)


def make_student(**overrides) -> Student:
    n = next(_ids)
    fields = {
        "id": f"stu-{n}",
        "first_name": "Alice",
        "last_name": f"Student{n}",
        "email": f"student{n}@school.edu",
        "student_number": f"2026-{n:03d}",
        "level": StudentLevel.YEAR_1,
        "created_at": BASE_TIME + timedelta(minutes=n),
    }
    fields.update(overrides)
    return Student(**fields)


def make_teacher(**overrides) -> Teacher:
    n = next(_ids)
    fields = {
        "id": f"tch-{n}",
        "first_name": "Sarah",
        "last_name": f"Teacher{n}",
        "email": f"teacher{n}@school.edu",
        "specialization": "Mathematics",
        "created_at": BASE_TIME + timedelta(minutes=n),
    }
    fields.update(overrides)
    return Teacher(**fields)


def make_subject(**overrides) -> Subject:
    n = next(_ids)
    fields = {
        "id": f"sub-{n}",
        "name": f"Subject {n}",
        "code": f"SUB{n:03d}",
        "coefficient": 1,
        "teacher_id": None,
        "created_at": BASE_TIME + timedelta(minutes=n),
    }
    fields.update(overrides)
    return Subject(**fields)
