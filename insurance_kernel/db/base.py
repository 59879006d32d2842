"""
Module: insurance_kernel.db.base
Responsibility: Declarative base shared by the Client and Contract models:
    opaque UUID identifiers, the Python-type to column-type mapping, and
    row audit timestamps.
Architecture position: Kernel > DB.  Imported by every model module; imports
    nothing from the rest of the kernel.

Invariants enforced:
    - Every row gets a uuid4 id on creation.  Ids are stored as 36-character
      strings so the same schema runs on PostgreSQL and SQLite.
    - A ``Decimal`` annotation becomes Numeric(19, 2): cost amounts carry
      exactly two fractional digits.  Money is never a float column.
    - A ``date`` annotation is a calendar date.  Contract validity is
      compared on dates only, never timestamps.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import ClassVar
from uuid import UUID as PyUUID, uuid4

from sqlalchemy import Date, DateTime, Numeric, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator


class UUIDString(TypeDecorator):
    """Python ``UUID`` in, ``UUID`` out; a plain string column in between."""

    impl = String(36)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return None if value is None else str(value)

    def process_result_value(self, value, dialect):
        return None if value is None else PyUUID(value)


class Base(DeclarativeBase):
    """Root of the ORM mapping; supplies ``id`` and the column type map."""

    type_annotation_map: ClassVar[dict] = {
        PyUUID: UUIDString(),
        Decimal: Numeric(19, 2),
        date: Date,
        datetime: DateTime(timezone=True),
    }

    id: Mapped[PyUUID] = mapped_column(UUIDString(), primary_key=True, default=uuid4)


class TrackedBase(Base):
    """
    Base for persisted entities, adding database-maintained timestamps.

    ``created_at`` / ``updated_at`` are row metadata written by the server.
    They are unrelated to a contract's ``update_date``, which services stamp
    from the injected clock.
    """

    __abstract__ = True

    created_at: Mapped[datetime] = mapped_column(
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
