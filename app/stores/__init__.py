"""Record stores - one collaborator per collection, selected by STORE_BACKEND"""

from typing import Optional

from app.config import settings
from app.models.enums import EntityKind
from app.models.school import StudentRecord, SubjectRecord, TeacherRecord
from app.schemas.school import Student, Subject, Teacher
from app.stores.base import RecordStore, SchoolStores
from app.stores.memory import MemoryStore
from app.stores.remote import RemoteTableStore, build_remote_client
from app.stores.sql import SqlStore


def memory_stores() -> SchoolStores:
    return SchoolStores(
        students=MemoryStore(Student, EntityKind.STUDENT.value),
        teachers=MemoryStore(Teacher, EntityKind.TEACHER.value),
        subjects=MemoryStore(Subject, EntityKind.SUBJECT.value),
        backend="memory",
    )


def sql_stores(session_factory) -> SchoolStores:
    return SchoolStores(
        students=SqlStore(Student, StudentRecord, session_factory, EntityKind.STUDENT.value),
        teachers=SqlStore(Teacher, TeacherRecord, session_factory, EntityKind.TEACHER.value),
        subjects=SqlStore(Subject, SubjectRecord, session_factory, EntityKind.SUBJECT.value),
        backend="database",
    )


def remote_stores(client) -> SchoolStores:
    def store(model, kind: EntityKind) -> RemoteTableStore:
        return RemoteTableStore(model, kind.table_name, client, kind.value)

    return SchoolStores(
        students=store(Student, EntityKind.STUDENT),
        teachers=store(Teacher, EntityKind.TEACHER),
        subjects=store(Subject, EntityKind.SUBJECT),
        backend="remote",
        on_close=client.aclose,
    )


def build_stores(backend: Optional[str] = None) -> SchoolStores:
    """
    Store factory.
    Returns the collections for the configured backend.
    """
    backend = (backend or settings.STORE_BACKEND).lower()

    if backend == "memory":
        return memory_stores()
    if backend == "database":
        from app.database import AsyncSessionLocal
        return sql_stores(AsyncSessionLocal)
    if backend == "remote":
        client = build_remote_client(
            settings.REMOTE_TABLE_URL,
            settings.REMOTE_TABLE_KEY,
            settings.REMOTE_TIMEOUT,
        )
        return remote_stores(client)
    raise ValueError(f"Unsupported store backend: {backend}")


__all__ = [
    "RecordStore",
    "SchoolStores",
    "MemoryStore",
    "SqlStore",
    "RemoteTableStore",
    "build_stores",
    "memory_stores",
    "sql_stores",
    "remote_stores",
]
