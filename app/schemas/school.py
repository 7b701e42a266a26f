"""Student, Teacher and Subject schemas.

Entity models are the canonical record shape shared by every store
(snake_case fields, string ids, naive UTC ``created_at``). The ``*Create``
and ``*Update`` schemas are the form boundary: anything that fails them is
rejected before a store is called.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.models.enums import StudentLevel
from app.utils.time import as_naive_utc


NAME_FIELD = dict(min_length=2, max_length=50)


class SchoolEntity(BaseModel):
    """Fields every stored record carries"""
    id: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        return str(v) if v is not None else v

    @field_validator("created_at")
    @classmethod
    def normalize_created_at(cls, v: datetime) -> datetime:
        return as_naive_utc(v)


# Students

class Student(SchoolEntity):
    first_name: str
    last_name: str
    email: str
    student_number: str
    level: StudentLevel

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class StudentCreate(BaseModel):
    first_name: str = Field(..., **NAME_FIELD)
    last_name: str = Field(..., **NAME_FIELD)
    email: EmailStr
    # Generated as {year}-{seq} when omitted
    student_number: Optional[str] = Field(None, min_length=1, max_length=20)
    level: StudentLevel

    @field_validator("first_name", "last_name", "student_number", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v


class StudentUpdate(BaseModel):
    first_name: Optional[str] = Field(None, **NAME_FIELD)
    last_name: Optional[str] = Field(None, **NAME_FIELD)
    email: Optional[EmailStr] = None
    student_number: Optional[str] = Field(None, min_length=1, max_length=20)
    level: Optional[StudentLevel] = None

    @field_validator("first_name", "last_name", "student_number", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v


# Teachers

class Teacher(SchoolEntity):
    first_name: str
    last_name: str
    email: str
    specialization: str

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class TeacherCreate(BaseModel):
    first_name: str = Field(..., **NAME_FIELD)
    last_name: str = Field(..., **NAME_FIELD)
    email: EmailStr
    specialization: str = Field(..., min_length=2, max_length=100)


class TeacherUpdate(BaseModel):
    first_name: Optional[str] = Field(None, **NAME_FIELD)
    last_name: Optional[str] = Field(None, **NAME_FIELD)
    email: Optional[EmailStr] = None
    specialization: Optional[str] = Field(None, min_length=2, max_length=100)


class TeacherResponse(Teacher):
    """Teacher row as listed, with the number of subjects assigned to them"""
    subject_count: int = 0


# Subjects

class Subject(SchoolEntity):
    name: str
    code: str
    coefficient: int = Field(..., ge=1, le=10)
    teacher_id: Optional[str] = None


class SubjectCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    code: str = Field(..., min_length=3, max_length=20)
    coefficient: int = Field(1, ge=1, le=10)
    teacher_id: str = Field(..., min_length=1, description="Teacher to assign; required by the form")

    @field_validator("code", mode="before")
    @classmethod
    def strip_code(cls, v):
        return v.strip() if isinstance(v, str) else v


class SubjectUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    code: Optional[str] = Field(None, min_length=3, max_length=20)
    coefficient: Optional[int] = Field(None, ge=1, le=10)
    teacher_id: Optional[str] = Field(None, min_length=1)

    @field_validator("code", mode="before")
    @classmethod
    def strip_code(cls, v):
        return v.strip() if isinstance(v, str) else v


class SubjectResponse(Subject):
    """Subject row with the assigned teacher resolved for display"""
    teacher_name: str = "Unassigned"
