from sqlalchemy import Column, Integer, String, CheckConstraint

from app.models.base import BaseModel


class StudentRecord(BaseModel):
    """
    Enrolled student. ``student_number`` is the human-readable identifier
    shown in lists (e.g. 2026-001).
    """
    __tablename__ = "students"

    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    email = Column(String(255), nullable=False)
    student_number = Column(String(20), nullable=False, unique=True, index=True)
    level = Column(String(20), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<Student {self.student_number}>"


class TeacherRecord(BaseModel):
    __tablename__ = "teachers"

    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    email = Column(String(255), nullable=False)
    specialization = Column(String(100), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<Teacher {self.first_name} {self.last_name}>"


class SubjectRecord(BaseModel):
    """
    Taught subject. ``teacher_id`` is a plain reference, not a foreign key:
    deleting a teacher leaves the subject pointing at nobody, which the
    display layer resolves to "Unassigned".
    """
    __tablename__ = "subjects"
    __table_args__ = (
        CheckConstraint("coefficient BETWEEN 1 AND 10", name="ck_subjects_coefficient_range"),
    )

    name = Column(String(100), nullable=False)
    code = Column(String(20), nullable=False, unique=True, index=True)
    coefficient = Column(Integer, nullable=False, default=1)
    teacher_id = Column(String(36), nullable=True, index=True)

    def __repr__(self) -> str:
        return f"<Subject {self.code}>"
