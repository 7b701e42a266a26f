"""Persistent record store on SQLAlchemy (SQLite file locally, PostgreSQL when configured)"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Generic, List, Type

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.errors import CollaboratorUnavailable, RecordNotFound, ValidationFailed
from app.models.base import BaseModel
from app.stores.base import EntityCodec, EntityT, writable_fields

logger = logging.getLogger(__name__)


class SqlStore(Generic[EntityT]):
    def __init__(
        self,
        model: Type[EntityT],
        record_cls: Type[BaseModel],
        session_factory: async_sessionmaker,
        entity: str,
    ) -> None:
        self.entity = entity
        self._codec = EntityCodec(model, entity)
        self._record_cls = record_cls
        self._session_factory = session_factory
        self._columns = set(record_cls.__table__.columns.keys())

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[AsyncSession]:
        """Session that commits on success and maps database failures to store errors."""
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except IntegrityError as exc:
                await session.rollback()
                logger.warning(
                    "Constraint violation",
                    extra={"entity": self.entity, "error": str(exc.orig)},
                )
                raise ValidationFailed(
                    f"The {self.entity} conflicts with an existing record or violates a constraint.",
                    entity=self.entity,
                ) from exc
            except SQLAlchemyError as exc:
                await session.rollback()
                logger.error(
                    "Database call failed",
                    extra={"entity": self.entity},
                    exc_info=True,
                )
                raise CollaboratorUnavailable(
                    f"The {self.entity} store is unavailable.", entity=self.entity
                ) from exc

    async def list(self) -> List[EntityT]:
        async with self._session() as session:
            result = await session.execute(
                select(self._record_cls).order_by(self._record_cls.created_at, self._record_cls.id)
            )
            return [self._codec.load_stored(row) for row in result.scalars().all()]

    async def get(self, record_id: str) -> EntityT:
        async with self._session() as session:
            row = await session.get(self._record_cls, record_id)
            if row is None:
                raise RecordNotFound.for_record(self.entity, record_id)
            return self._codec.load_stored(row)

    async def create(self, fields: Dict[str, Any]) -> EntityT:
        values = self._column_values(fields)
        async with self._session() as session:
            row = self._record_cls(**values)
            session.add(row)
            await session.flush()
            await session.refresh(row)
            return self._codec.load(row)

    async def update(self, record_id: str, changes: Dict[str, Any]) -> EntityT:
        values = self._column_values(changes)
        async with self._session() as session:
            row = await session.get(self._record_cls, record_id)
            if row is None:
                raise RecordNotFound.for_record(self.entity, record_id)
            for key, value in values.items():
                setattr(row, key, value)
            await session.flush()
            await session.refresh(row)
            return self._codec.load(row)

    async def delete(self, record_id: str) -> None:
        async with self._session() as session:
            row = await session.get(self._record_cls, record_id)
            if row is None:
                raise RecordNotFound.for_record(self.entity, record_id)
            await session.delete(row)

    def _column_values(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        values = {}
        for key, value in writable_fields(fields).items():
            if key not in self._columns or key == "updated_at":
                continue
            # Enums are stored by value
            values[key] = getattr(value, "value", value)
        return values
