"""School Service - Business logic over the record stores"""

import asyncio
import logging
import re
from typing import Iterable, List, Optional

from app.core.errors import ValidationFailed
from app.schemas.dashboard import DashboardSummary
from app.schemas.school import (
    Student,
    StudentCreate,
    StudentUpdate,
    Subject,
    SubjectCreate,
    SubjectResponse,
    SubjectUpdate,
    Teacher,
    TeacherCreate,
    TeacherResponse,
    TeacherUpdate,
)
from app.services import aggregation
from app.stores.base import SchoolStores
from app.utils.time import get_utc_now

logger = logging.getLogger(__name__)


class SchoolService:
    """Service layer for student, teacher and subject operations"""

    # Students

    @staticmethod
    def generate_next_student_number(students: Iterable[Student], year: Optional[int] = None) -> str:
        """Next student_number in format {year}-{seq} (e.g. 2026-001). Custom formats are ignored."""
        year = year or get_utc_now().year
        pattern = re.compile(rf"^{year}-(\d+)$")
        max_seq = 0
        for student in students:
            match = pattern.match(student.student_number or "")
            if match:
                max_seq = max(max_seq, int(match.group(1)))
        return f"{year}-{max_seq + 1:03d}"

    @staticmethod
    def _check_student_number(students: Iterable[Student], number: str, exclude_id: Optional[str] = None) -> None:
        for student in students:
            if student.student_number == number and student.id != exclude_id:
                raise ValidationFailed(
                    f"Student number {number} already exists",
                    field="student_number",
                    entity="student",
                )

    @staticmethod
    async def list_students(stores: SchoolStores) -> List[Student]:
        return await stores.students.list()

    @staticmethod
    async def create_student(stores: SchoolStores, data: StudentCreate) -> Student:
        """
        Create a student. Auto-generates student_number as {year}-{seq} if not provided.
        """
        existing = await stores.students.list()
        fields = data.model_dump()
        if data.student_number is None:
            fields["student_number"] = SchoolService.generate_next_student_number(existing)
        else:
            SchoolService._check_student_number(existing, data.student_number)

        student = await stores.students.create(fields)
        logger.info(
            "Student created",
            extra={"student_id": student.id, "student_number": student.student_number},
        )
        return student

    @staticmethod
    async def update_student(stores: SchoolStores, student_id: str, data: StudentUpdate) -> Student:
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        # Surfaces NotFound before any uniqueness work
        await stores.students.get(student_id)
        if "student_number" in changes:
            existing = await stores.students.list()
            SchoolService._check_student_number(existing, changes["student_number"], exclude_id=student_id)

        student = await stores.students.update(student_id, changes)
        logger.info("Student updated", extra={"student_id": student_id, "fields": sorted(changes)})
        return student

    @staticmethod
    async def delete_student(stores: SchoolStores, student_id: str) -> None:
        await stores.students.delete(student_id)
        logger.info("Student deleted", extra={"student_id": student_id})

    # Teachers

    @staticmethod
    async def list_teachers(stores: SchoolStores) -> List[TeacherResponse]:
        """Teachers with the number of subjects assigned to each."""
        teachers, subjects = await asyncio.gather(stores.teachers.list(), stores.subjects.list())
        counts = aggregation.subject_count_by_teacher(subjects, teachers)
        return [
            TeacherResponse(**teacher.model_dump(), subject_count=counts[teacher.id])
            for teacher in teachers
        ]

    @staticmethod
    async def create_teacher(stores: SchoolStores, data: TeacherCreate) -> Teacher:
        teacher = await stores.teachers.create(data.model_dump())
        logger.info("Teacher created", extra={"teacher_id": teacher.id})
        return teacher

    @staticmethod
    async def update_teacher(stores: SchoolStores, teacher_id: str, data: TeacherUpdate) -> Teacher:
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        teacher = await stores.teachers.update(teacher_id, changes)
        logger.info("Teacher updated", extra={"teacher_id": teacher_id, "fields": sorted(changes)})
        return teacher

    @staticmethod
    async def delete_teacher(stores: SchoolStores, teacher_id: str) -> None:
        """
        Delete a teacher. Subjects referencing them are left as they are and
        display as "Unassigned" from now on.
        """
        await stores.teachers.delete(teacher_id)
        logger.info("Teacher deleted", extra={"teacher_id": teacher_id})

    # Subjects

    @staticmethod
    def _check_subject_code(subjects: Iterable[Subject], code: str, exclude_id: Optional[str] = None) -> None:
        wanted = code.lower()
        for subject in subjects:
            if subject.code.lower() == wanted and subject.id != exclude_id:
                raise ValidationFailed(
                    f"Subject code {code} already exists",
                    field="code",
                    entity="subject",
                )

    @staticmethod
    def _check_teacher_exists(teachers: Iterable[Teacher], teacher_id: str) -> None:
        if not any(teacher.id == teacher_id for teacher in teachers):
            raise ValidationFailed(
                "Please select an existing teacher",
                field="teacher_id",
                entity="subject",
            )

    @staticmethod
    def to_subject_response(subject: Subject, teachers: List[Teacher]) -> SubjectResponse:
        return SubjectResponse(
            **subject.model_dump(),
            teacher_name=aggregation.teacher_name(subject.teacher_id, teachers),
        )

    @staticmethod
    async def list_subjects(stores: SchoolStores) -> List[SubjectResponse]:
        subjects, teachers = await asyncio.gather(stores.subjects.list(), stores.teachers.list())
        return [SchoolService.to_subject_response(s, teachers) for s in subjects]

    @staticmethod
    async def get_subject(stores: SchoolStores, subject_id: str) -> SubjectResponse:
        subject, teachers = await asyncio.gather(
            stores.subjects.get(subject_id), stores.teachers.list()
        )
        return SchoolService.to_subject_response(subject, teachers)

    @staticmethod
    async def create_subject(stores: SchoolStores, data: SubjectCreate) -> SubjectResponse:
        subjects, teachers = await asyncio.gather(stores.subjects.list(), stores.teachers.list())
        SchoolService._check_subject_code(subjects, data.code)
        SchoolService._check_teacher_exists(teachers, data.teacher_id)

        subject = await stores.subjects.create(data.model_dump())
        logger.info(
            "Subject created",
            extra={"subject_id": subject.id, "code": subject.code, "teacher_id": subject.teacher_id},
        )
        return SchoolService.to_subject_response(subject, teachers)

    @staticmethod
    async def update_subject(stores: SchoolStores, subject_id: str, data: SubjectUpdate) -> SubjectResponse:
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        await stores.subjects.get(subject_id)
        subjects, teachers = await asyncio.gather(stores.subjects.list(), stores.teachers.list())
        if "code" in changes:
            SchoolService._check_subject_code(subjects, changes["code"], exclude_id=subject_id)
        if "teacher_id" in changes:
            SchoolService._check_teacher_exists(teachers, changes["teacher_id"])

        subject = await stores.subjects.update(subject_id, changes)
        logger.info("Subject updated", extra={"subject_id": subject_id, "fields": sorted(changes)})
        return SchoolService.to_subject_response(subject, teachers)

    @staticmethod
    async def delete_subject(stores: SchoolStores, subject_id: str) -> None:
        await stores.subjects.delete(subject_id)
        logger.info("Subject deleted", extra={"subject_id": subject_id})

    # Dashboard

    @staticmethod
    async def get_dashboard(stores: SchoolStores, recent: int = 5) -> DashboardSummary:
        """
        Get aggregated stats for the admin dashboard.
        """
        students, teachers, subjects = await asyncio.gather(
            stores.students.list(),
            stores.teachers.list(),
            stores.subjects.list(),
        )
        return aggregation.build_dashboard(students, teachers, subjects, recent=recent)
