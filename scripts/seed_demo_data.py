#!/usr/bin/env python3
"""
Seed the configured record store with a small demo school.

Usage:
  STORE_BACKEND=database python scripts/seed_demo_data.py
  # Reads DATABASE_URL / REMOTE_TABLE_URL from .env like the app does

Running it twice fails on the unique subject codes; that is expected.
"""
import asyncio
import os
import sys

from dotenv import load_dotenv

_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
load_dotenv(os.path.join(_root, ".env"))

# Add project root to path
sys.path.insert(0, _root)

from app.config import settings  # noqa: E402
from app.core.errors import StoreError  # noqa: E402
from app.models.enums import StudentLevel  # noqa: E402
from app.schemas.school import StudentCreate, SubjectCreate, TeacherCreate  # noqa: E402
from app.services.school_service import SchoolService  # noqa: E402
from app.stores import build_stores  # noqa: E402

TEACHERS = [
    ("Sarah", "Johnson", "sarah.johnson@school.edu", "Mathematics"),
    ("Michael", "Chen", "michael.chen@school.edu", "Physics"),
    ("Emily", "Davis", "emily.davis@school.edu", "Literature"),
]

SUBJECTS = [
    ("Calculus I", "MATH101", 4, 0),
    ("Linear Algebra", "MATH201", 3, 0),
    ("Mechanics", "PHYS101", 5, 1),
    ("World Literature", "LIT110", 2, 2),
]

STUDENTS = [
    ("Alice", "Martin", "alice.martin@student.edu", StudentLevel.YEAR_1),
    ("Bob", "Wilson", "bob.wilson@student.edu", StudentLevel.YEAR_1),
    ("Chloe", "Nguyen", "chloe.nguyen@student.edu", StudentLevel.YEAR_2),
    ("David", "Brown", "david.brown@student.edu", StudentLevel.YEAR_3),
    ("Eva", "Garcia", "eva.garcia@student.edu", StudentLevel.YEAR_5),
]


async def seed() -> None:
    if settings.STORE_BACKEND == "database":
        from app.database import init_db
        await init_db()

    stores = build_stores()
    try:
        teachers = []
        for first, last, email, specialization in TEACHERS:
            teachers.append(await SchoolService.create_teacher(
                stores,
                TeacherCreate(first_name=first, last_name=last, email=email, specialization=specialization),
            ))
        for name, code, coefficient, teacher_index in SUBJECTS:
            await SchoolService.create_subject(
                stores,
                SubjectCreate(name=name, code=code, coefficient=coefficient, teacher_id=teachers[teacher_index].id),
            )
        for first, last, email, level in STUDENTS:
            await SchoolService.create_student(
                stores,
                StudentCreate(first_name=first, last_name=last, email=email, level=level),
            )
        summary = await SchoolService.get_dashboard(stores)
    finally:
        await stores.close()

    print(
        f"Seeded {summary.total_teachers} teachers, {summary.total_subjects} subjects, "
        f"{summary.total_students} students into the '{settings.STORE_BACKEND}' store."
    )


def main():
    if settings.STORE_BACKEND == "memory":
        print("ERROR: STORE_BACKEND=memory keeps nothing after exit. Use 'database' or 'remote'.")
        sys.exit(1)
    try:
        asyncio.run(seed())
    except StoreError as exc:
        print(f"FAILED: {exc.message}")
        sys.exit(1)


if __name__ == "__main__":
    main()
