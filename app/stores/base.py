"""Record store contract shared by every backing implementation"""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Generic, List, Optional, Protocol, Type, TypeVar

from pydantic import ValidationError

from app.core.errors import CollaboratorUnavailable, ValidationFailed
from app.schemas.school import SchoolEntity, Student, Subject, Teacher

EntityT = TypeVar("EntityT", bound=SchoolEntity)

logger = logging.getLogger(__name__)

# Assigned by the store on create and never changed afterwards
STORE_MANAGED_FIELDS = ("id", "created_at")


class RecordStore(Protocol[EntityT]):
    """
    One collection of records. Ids and ``created_at`` are assigned by the
    store; ``update`` is a partial update; missing targets raise
    ``RecordNotFound`` and backend failures ``CollaboratorUnavailable``.
    """

    entity: str

    async def list(self) -> List[EntityT]: ...

    async def get(self, record_id: str) -> EntityT: ...

    async def create(self, fields: Dict[str, Any]) -> EntityT: ...

    async def update(self, record_id: str, changes: Dict[str, Any]) -> EntityT: ...

    async def delete(self, record_id: str) -> None: ...


class EntityCodec(Generic[EntityT]):
    """Validates raw rows into entity models for one collection"""

    def __init__(self, model: Type[EntityT], entity: str) -> None:
        self.model = model
        self.entity = entity

    def load(self, row: Any) -> EntityT:
        try:
            return self.model.model_validate(row)
        except ValidationError as exc:
            raise ValidationFailed(
                f"Invalid {self.entity} record: {exc.errors()[0]['msg']}",
                field=_first_error_field(exc),
                entity=self.entity,
            ) from exc

    def load_stored(self, row: Any) -> EntityT:
        """Load a row read back from the store; a malformed row is a store fault."""
        try:
            return self.model.model_validate(row)
        except ValidationError as exc:
            logger.error(
                "Stored record failed validation",
                extra={"entity": self.entity, "error": exc.errors()[0]["msg"]},
            )
            raise CollaboratorUnavailable(
                f"The {self.entity} store returned a malformed record.",
                entity=self.entity,
            ) from exc


def writable_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Drop store-managed keys from a create/update payload."""
    return {key: value for key, value in fields.items() if key not in STORE_MANAGED_FIELDS}


def _first_error_field(exc: ValidationError) -> Optional[str]:
    errors = exc.errors()
    if errors and errors[0].get("loc"):
        return str(errors[0]["loc"][0])
    return None


@dataclass
class SchoolStores:
    """The three collections of one application session"""
    students: RecordStore[Student]
    teachers: RecordStore[Teacher]
    subjects: RecordStore[Subject]
    backend: str = "memory"
    on_close: Optional[Callable[[], Awaitable[None]]] = None

    async def close(self) -> None:
        if self.on_close is not None:
            await self.on_close()
