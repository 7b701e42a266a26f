"""Base Models for DRY principles"""

import uuid
from sqlalchemy import Column, DateTime, String

from app.database import Base
from app.utils.time import get_utc_now


def new_record_id() -> str:
    return str(uuid.uuid4())


class BaseModel(Base):
    """
    Base model class with common fields for all records.

    Provides:
    - string UUID primary key (identifiers travel as text across every store)
    - created_at timestamp, written once on insert
    - updated_at timestamp
    """
    __abstract__ = True

    id = Column(String(36), primary_key=True, default=new_record_id, index=True)
    created_at = Column(DateTime, default=get_utc_now, nullable=False, index=True)
    updated_at = Column(DateTime, default=get_utc_now, onupdate=get_utc_now, nullable=False)
