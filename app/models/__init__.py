"""Models Package - Export all models for easy imports"""

from app.models.base import BaseModel
from app.models.enums import StudentLevel, EntityKind
from app.models.school import StudentRecord, TeacherRecord, SubjectRecord


__all__ = [
    # Base classes
    "BaseModel",

    # Enums
    "StudentLevel",
    "EntityKind",

    # School records
    "StudentRecord",
    "TeacherRecord",
    "SubjectRecord",
]
