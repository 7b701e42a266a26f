"""Dashboard aggregation over the student, teacher and subject collections.

Every function here is pure: it reads the collections it is given and never
mutates them. Degenerate input (empty collections, zero teachers) yields a
sentinel value (0, 0.0, ``None``, empty list) instead of an error.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Optional, Sequence, Sized, TypeVar

from app.models.enums import StudentLevel
from app.schemas.dashboard import DashboardSummary, LevelShare, TeacherLoad
from app.schemas.school import SchoolEntity, Student, Subject, Teacher

UNASSIGNED = "Unassigned"
NOT_AVAILABLE = "N/A"

EntityT = TypeVar("EntityT", bound=SchoolEntity)


def round_one(value: float) -> float:
    """Round half-up to one decimal place (2.25 -> 2.3, unlike ``round``)."""
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def total_count(collection: Sized) -> int:
    return len(collection)


def average_coefficient(subjects: Sequence[Subject]) -> float:
    """Arithmetic mean of the coefficients; 0.0 for no subjects."""
    if not subjects:
        return 0.0
    return sum(s.coefficient for s in subjects) / len(subjects)


def total_coefficient_points(subjects: Iterable[Subject]) -> int:
    return sum(s.coefficient for s in subjects)


def distribution_by_level(
    students: Sequence[Student],
    levels: Optional[Sequence[str]] = None,
) -> List[LevelShare]:
    """
    Count students per level, in the order of ``levels`` (the StudentLevel
    enumeration by default), with each count's share rounded to one decimal.
    Students whose level is not listed are counted in the total only.
    """
    if levels is None:
        levels = StudentLevel.ordered_values()
    total = len(students)
    counts: Dict[str, int] = {level: 0 for level in levels}
    for student in students:
        level = _level_value(student.level)
        if level in counts:
            counts[level] += 1

    return [
        LevelShare(
            level=level,
            count=counts[level],
            percentage=round_one(counts[level] / total * 100) if total else 0.0,
        )
        for level in levels
    ]


def active_level_count(distribution: Iterable[LevelShare]) -> int:
    return sum(1 for share in distribution if share.count > 0)


def most_common_level(distribution: Sequence[LevelShare]) -> Optional[str]:
    """Level with the most students, earliest level on ties; None when nobody is enrolled."""
    best: Optional[LevelShare] = None
    for share in distribution:
        if best is None or share.count > best.count:
            best = share
    if best is None or best.count == 0:
        return None
    return best.level


def subject_count_by_teacher(
    subjects: Iterable[Subject],
    teachers: Iterable[Teacher],
) -> Dict[str, int]:
    """Subjects per teacher id, in teacher order. Unassigned or dangling subjects are not counted."""
    counts: Dict[str, int] = {teacher.id: 0 for teacher in teachers}
    for subject in subjects:
        if subject.teacher_id in counts:
            counts[subject.teacher_id] += 1
    return counts


def teachers_with_subjects(counts: Dict[str, int]) -> int:
    return sum(1 for count in counts.values() if count > 0)


def specialization_stats(
    subjects: Iterable[Subject],
    teachers: Sequence[Teacher],
) -> Dict[str, int]:
    """Subjects taught per teacher specialization, in order of first appearance."""
    counts = subject_count_by_teacher(subjects, teachers)
    stats: Dict[str, int] = {}
    for teacher in teachers:
        stats[teacher.specialization] = stats.get(teacher.specialization, 0) + counts[teacher.id]
    return stats


def recent_records(collection: Iterable[EntityT], n: int) -> List[EntityT]:
    """
    The ``n`` most recently created records, newest first.

    Records sharing a ``created_at`` keep their collection order (the sort
    is stable), so the result is deterministic for a given input.
    """
    if n <= 0:
        return []
    return sorted(collection, key=lambda record: record.created_at, reverse=True)[:n]


def student_teacher_ratio(student_count: int, teacher_count: int) -> Optional[float]:
    """Students per teacher, or None when there are no teachers."""
    if teacher_count <= 0:
        return None
    return student_count / teacher_count


def subjects_per_teacher(subject_count: int, teacher_count: int) -> float:
    if teacher_count <= 0:
        return 0.0
    return subject_count / teacher_count


def format_ratio(ratio: Optional[float]) -> str:
    if ratio is None:
        return NOT_AVAILABLE
    return f"{round_one(ratio):.1f}:1"


def teacher_name(teacher_id: Optional[str], teachers: Iterable[Teacher]) -> str:
    """Display name of the referenced teacher, "Unassigned" when absent or deleted."""
    if not teacher_id:
        return UNASSIGNED
    for teacher in teachers:
        if teacher.id == teacher_id:
            return teacher.full_name
    return UNASSIGNED


def build_dashboard(
    students: Sequence[Student],
    teachers: Sequence[Teacher],
    subjects: Sequence[Subject],
    recent: int = 5,
) -> DashboardSummary:
    total_students = total_count(students)
    total_teachers = total_count(teachers)
    total_subjects = total_count(subjects)

    distribution = distribution_by_level(students)
    counts = subject_count_by_teacher(subjects, teachers)
    ratio = student_teacher_ratio(total_students, total_teachers)

    return DashboardSummary(
        has_data=bool(total_students or total_teachers or total_subjects),
        total_students=total_students,
        total_teachers=total_teachers,
        total_subjects=total_subjects,
        average_coefficient=round_one(average_coefficient(subjects)),
        total_coefficient_points=total_coefficient_points(subjects),
        student_teacher_ratio=round_one(ratio) if ratio is not None else None,
        student_teacher_ratio_display=format_ratio(ratio),
        subjects_per_teacher=round_one(subjects_per_teacher(total_subjects, total_teachers)),
        active_levels=active_level_count(distribution),
        most_common_level=most_common_level(distribution),
        students_by_level=distribution,
        teachers_with_subjects=teachers_with_subjects(counts),
        teacher_loads=[
            TeacherLoad(
                teacher_id=teacher.id,
                name=teacher.full_name,
                specialization=teacher.specialization,
                subject_count=counts[teacher.id],
            )
            for teacher in teachers
        ],
        specialization_stats=specialization_stats(subjects, teachers),
        recent_students=recent_records(students, recent),
    )


def _level_value(level) -> str:
    return level.value if isinstance(level, StudentLevel) else str(level)
