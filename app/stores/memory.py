"""In-memory record store, scoped to the application session"""

import logging
import uuid
from typing import Any, Dict, Generic, Iterable, List, Type

from app.core.errors import RecordNotFound
from app.stores.base import EntityCodec, EntityT, writable_fields
from app.utils.time import get_utc_now

logger = logging.getLogger(__name__)


class MemoryStore(Generic[EntityT]):
    """Dict-backed collection in insertion order. Records are frozen models, so no caller can alias-mutate them."""

    def __init__(self, model: Type[EntityT], entity: str, seed: Iterable[EntityT] = ()) -> None:
        self.entity = entity
        self._codec = EntityCodec(model, entity)
        self._records: Dict[str, EntityT] = {record.id: record for record in seed}

    async def list(self) -> List[EntityT]:
        return list(self._records.values())

    async def get(self, record_id: str) -> EntityT:
        try:
            return self._records[record_id]
        except KeyError:
            raise RecordNotFound.for_record(self.entity, record_id) from None

    async def create(self, fields: Dict[str, Any]) -> EntityT:
        record = self._codec.load({
            **writable_fields(fields),
            "id": str(uuid.uuid4()),
            "created_at": get_utc_now(),
        })
        self._records[record.id] = record
        logger.debug("Stored %s %s in memory", self.entity, record.id)
        return record

    async def update(self, record_id: str, changes: Dict[str, Any]) -> EntityT:
        current = await self.get(record_id)
        record = self._codec.load({**current.model_dump(), **writable_fields(changes)})
        self._records[record_id] = record
        return record

    async def delete(self, record_id: str) -> None:
        if self._records.pop(record_id, None) is None:
            raise RecordNotFound.for_record(self.entity, record_id)
