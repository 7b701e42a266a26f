"""Centralized Enum Definitions"""

import enum


class StudentLevel(str, enum.Enum):
    """School year of a student. Declaration order is the reporting order."""
    YEAR_1 = "Year 1"
    YEAR_2 = "Year 2"
    YEAR_3 = "Year 3"
    YEAR_4 = "Year 4"
    YEAR_5 = "Year 5"

    @classmethod
    def ordered_values(cls) -> list:
        return [level.value for level in cls]


class EntityKind(str, enum.Enum):
    """Record collections managed by the admin backend"""
    STUDENT = "student"
    TEACHER = "teacher"
    SUBJECT = "subject"

    @property
    def table_name(self) -> str:
        return f"{self.value}s"
