"""Column and search definitions for the student, teacher and subject lists"""

from typing import Any, Iterable, Optional

from app.services.table_view import Column, ColumnKind, IntentHandler, TableViewModel, field_value


def _full_name(record: Any) -> str:
    return f"{field_value(record, 'first_name') or ''} {field_value(record, 'last_name') or ''}".strip()


STUDENT_COLUMNS = (
    Column("student_number", "Student #"),
    Column("name", "Name", accessor=_full_name),
    Column("email", "Email"),
    Column("level", "Level"),
    Column("created_at", "Enrolled", kind=ColumnKind.DATETIME),
)
STUDENT_SEARCH_KEYS = ("first_name", "last_name", "email", "student_number")

TEACHER_COLUMNS = (
    Column("name", "Name", accessor=_full_name),
    Column("email", "Email"),
    Column("specialization", "Specialization"),
    Column("subject_count", "Subjects", kind=ColumnKind.NUMBER),
    Column("created_at", "Joined", kind=ColumnKind.DATETIME),
)
TEACHER_SEARCH_KEYS = ("first_name", "last_name", "email", "specialization")

SUBJECT_COLUMNS = (
    Column("code", "Code"),
    Column("name", "Subject Name"),
    Column("coefficient", "Coefficient", kind=ColumnKind.NUMBER),
    Column("teacher_name", "Assigned Teacher"),
    Column("created_at", "Created", kind=ColumnKind.DATETIME),
)
SUBJECT_SEARCH_KEYS = ("name", "code")


def student_table(records: Iterable[Any], on_intent: Optional[IntentHandler] = None) -> TableViewModel:
    return TableViewModel(records, STUDENT_COLUMNS, STUDENT_SEARCH_KEYS, on_intent)


def teacher_table(records: Iterable[Any], on_intent: Optional[IntentHandler] = None) -> TableViewModel:
    return TableViewModel(records, TEACHER_COLUMNS, TEACHER_SEARCH_KEYS, on_intent)


def subject_table(records: Iterable[Any], on_intent: Optional[IntentHandler] = None) -> TableViewModel:
    return TableViewModel(records, SUBJECT_COLUMNS, SUBJECT_SEARCH_KEYS, on_intent)
