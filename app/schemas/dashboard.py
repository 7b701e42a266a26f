"""Dashboard statistics schemas"""

from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from app.schemas.school import Student


class LevelShare(BaseModel):
    """Student count for one level and its share of all students"""
    level: str
    count: int = Field(..., ge=0)
    percentage: float = Field(..., ge=0, le=100)


class TeacherLoad(BaseModel):
    teacher_id: str
    name: str
    specialization: str
    subject_count: int = Field(..., ge=0)


class DashboardSummary(BaseModel):
    """
    Aggregate view over the three collections.

    Ratios that have no meaningful value (no teachers) are ``None`` and
    shown as "N/A" through the matching ``*_display`` field.
    """
    has_data: bool
    total_students: int
    total_teachers: int
    total_subjects: int

    average_coefficient: float
    total_coefficient_points: int
    student_teacher_ratio: Optional[float] = None
    student_teacher_ratio_display: str = "N/A"
    subjects_per_teacher: float

    active_levels: int
    most_common_level: Optional[str] = None
    students_by_level: List[LevelShare]

    teachers_with_subjects: int
    teacher_loads: List[TeacherLoad]
    specialization_stats: Dict[str, int]

    recent_students: List[Student]
