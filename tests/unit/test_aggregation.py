"""Unit tests for dashboard aggregation (pure functions, no stores)."""

from datetime import timedelta

import pytest

from app.models.enums import StudentLevel
from app.services import aggregation
from tests.factories import BASE_TIME, make_student, make_subject, make_teacher


def test_total_count():
    assert aggregation.total_count([]) == 0
    assert aggregation.total_count([make_student(), make_student()]) == 2


def test_average_coefficient_empty_is_zero():
    assert aggregation.average_coefficient([]) == 0.0


def test_average_coefficient_is_mean():
    subjects = [make_subject(coefficient=c) for c in (3, 7, 4)]
    assert aggregation.average_coefficient(subjects) == pytest.approx(14 / 3)


def test_total_coefficient_points():
    subjects = [make_subject(coefficient=c) for c in (3, 7, 4)]
    assert aggregation.total_coefficient_points(subjects) == 14
    assert aggregation.total_coefficient_points([]) == 0


def test_distribution_follows_enumeration_order():
    students = [
        make_student(level=StudentLevel.YEAR_3),
        make_student(level=StudentLevel.YEAR_1),
        make_student(level=StudentLevel.YEAR_3),
    ]
    shares = aggregation.distribution_by_level(students)
    assert [s.level for s in shares] == ["Year 1", "Year 2", "Year 3", "Year 4", "Year 5"]
    assert [s.count for s in shares] == [1, 0, 2, 0, 0]
    assert [s.percentage for s in shares] == [33.3, 0.0, 66.7, 0.0, 0.0]


def test_distribution_counts_sum_to_total():
    levels = list(StudentLevel)
    students = [make_student(level=levels[i % 5]) for i in range(13)]
    shares = aggregation.distribution_by_level(students)
    assert sum(s.count for s in shares) == 13
    assert sum(s.percentage for s in shares) == pytest.approx(100, abs=0.5)


def test_distribution_with_no_students():
    shares = aggregation.distribution_by_level([])
    assert len(shares) == 5
    assert all(s.count == 0 and s.percentage == 0.0 for s in shares)


def test_distribution_custom_levels():
    students = [make_student(level=StudentLevel.YEAR_2)]
    shares = aggregation.distribution_by_level(students, levels=["Year 2", "Year 1"])
    assert [(s.level, s.count, s.percentage) for s in shares] == [
        ("Year 2", 1, 100.0),
        ("Year 1", 0, 0.0),
    ]


def test_most_common_level_and_active_levels():
    students = [
        make_student(level=StudentLevel.YEAR_2),
        make_student(level=StudentLevel.YEAR_4),
        make_student(level=StudentLevel.YEAR_4),
    ]
    shares = aggregation.distribution_by_level(students)
    assert aggregation.most_common_level(shares) == "Year 4"
    assert aggregation.active_level_count(shares) == 2


def test_most_common_level_tie_prefers_earlier_level():
    students = [make_student(level=StudentLevel.YEAR_5), make_student(level=StudentLevel.YEAR_2)]
    shares = aggregation.distribution_by_level(students)
    assert aggregation.most_common_level(shares) == "Year 2"


def test_most_common_level_none_without_students():
    assert aggregation.most_common_level(aggregation.distribution_by_level([])) is None


def test_subject_count_by_teacher():
    t1, t2, t3 = make_teacher(), make_teacher(), make_teacher()
    subjects = [
        make_subject(teacher_id=t1.id),
        make_subject(teacher_id=t1.id),
        make_subject(teacher_id=t3.id),
        make_subject(teacher_id=None),
        make_subject(teacher_id="deleted-teacher"),
    ]
    counts = aggregation.subject_count_by_teacher(subjects, [t1, t2, t3])
    assert counts == {t1.id: 2, t2.id: 0, t3.id: 1}
    assert list(counts) == [t1.id, t2.id, t3.id]
    # Unassigned and dangling subjects are the difference
    assert sum(counts.values()) == len(subjects) - 2
    assert aggregation.teachers_with_subjects(counts) == 2


def test_specialization_stats():
    math1 = make_teacher(specialization="Mathematics")
    math2 = make_teacher(specialization="Mathematics")
    art = make_teacher(specialization="Art")
    subjects = [make_subject(teacher_id=math1.id), make_subject(teacher_id=math2.id)]
    assert aggregation.specialization_stats(subjects, [math1, art, math2]) == {
        "Mathematics": 2,
        "Art": 0,
    }


def test_recent_records_newest_first():
    old = make_student(created_at=BASE_TIME)
    mid = make_student(created_at=BASE_TIME + timedelta(days=1))
    new = make_student(created_at=BASE_TIME + timedelta(days=2))
    assert aggregation.recent_records([old, new, mid], 2) == [new, mid]


def test_recent_records_ties_keep_collection_order():
    a = make_student(created_at=BASE_TIME)
    b = make_student(created_at=BASE_TIME)
    c = make_student(created_at=BASE_TIME)
    assert aggregation.recent_records([a, b, c], 3) == [a, b, c]
    assert aggregation.recent_records([c, a, b], 2) == [c, a]


def test_recent_records_degenerate_sizes():
    students = [make_student()]
    assert aggregation.recent_records(students, 0) == []
    assert aggregation.recent_records(students, 10) == students
    assert aggregation.recent_records([], 5) == []


def test_student_teacher_ratio():
    assert aggregation.student_teacher_ratio(10, 0) is None
    assert aggregation.student_teacher_ratio(10, 2) == 5.0
    assert aggregation.format_ratio(None) == "N/A"
    assert aggregation.format_ratio(10 / 3) == "3.3:1"


def test_subjects_per_teacher():
    assert aggregation.subjects_per_teacher(5, 0) == 0.0
    assert aggregation.subjects_per_teacher(5, 2) == 2.5


def test_round_one_is_half_up():
    assert aggregation.round_one(2.25) == 2.3
    assert aggregation.round_one(0.05) == 0.1
    assert aggregation.round_one(66.666) == 66.7


def test_teacher_name_resolution():
    teacher = make_teacher(first_name="Sarah", last_name="Johnson")
    assert aggregation.teacher_name(teacher.id, [teacher]) == "Sarah Johnson"
    assert aggregation.teacher_name(None, [teacher]) == "Unassigned"
    assert aggregation.teacher_name("", [teacher]) == "Unassigned"


def test_teacher_name_after_teacher_deleted():
    teacher = make_teacher()
    subject = make_subject(teacher_id=teacher.id)
    remaining_teachers = []
    assert aggregation.teacher_name(subject.teacher_id, remaining_teachers) == "Unassigned"


def test_build_dashboard_empty():
    summary = aggregation.build_dashboard([], [], [])
    assert summary.has_data is False
    assert summary.total_students == summary.total_teachers == summary.total_subjects == 0
    assert summary.average_coefficient == 0.0
    assert summary.student_teacher_ratio is None
    assert summary.student_teacher_ratio_display == "N/A"
    assert summary.subjects_per_teacher == 0.0
    assert summary.most_common_level is None
    assert summary.recent_students == []
    assert summary.teacher_loads == []
    assert summary.specialization_stats == {}


def test_build_dashboard():
    t1 = make_teacher(first_name="Sarah", last_name="Johnson", specialization="Mathematics")
    t2 = make_teacher(first_name="Michael", last_name="Chen", specialization="Physics")
    subjects = [
        make_subject(coefficient=4, teacher_id=t1.id),
        make_subject(coefficient=3, teacher_id=t1.id),
        make_subject(coefficient=5, teacher_id=None),
    ]
    students = [make_student(level=StudentLevel.YEAR_1) for _ in range(4)] + [
        make_student(level=StudentLevel.YEAR_2)
    ]

    summary = aggregation.build_dashboard(students, [t1, t2], subjects, recent=3)

    assert summary.has_data is True
    assert summary.total_students == 5
    assert summary.average_coefficient == 4.0
    assert summary.total_coefficient_points == 12
    assert summary.student_teacher_ratio == 2.5
    assert summary.student_teacher_ratio_display == "2.5:1"
    assert summary.subjects_per_teacher == 1.5
    assert summary.active_levels == 2
    assert summary.most_common_level == "Year 1"
    assert summary.teachers_with_subjects == 1
    assert [(t.name, t.subject_count) for t in summary.teacher_loads] == [
        ("Sarah Johnson", 2),
        ("Michael Chen", 0),
    ]
    assert summary.specialization_stats == {"Mathematics": 2, "Physics": 0}
    assert [s.id for s in summary.recent_students] == [s.id for s in reversed(students)][:3]


def test_aggregation_does_not_mutate_inputs():
    students = [make_student(), make_student()]
    snapshot = list(students)
    aggregation.recent_records(students, 1)
    aggregation.build_dashboard(students, [], [])
    assert students == snapshot
