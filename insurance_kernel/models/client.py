"""
Module: insurance_kernel.models.client
Responsibility: ORM persistence for insurance clients.  One table holds both
    variants; ``client_type`` is the tag, and exactly one of ``birthdate``
    (PERSON) or ``company_identifier`` (COMPANY) is populated.
Architecture position: Kernel > Models.  May import from db/base.py and
    domain/dtos.py only.  MUST NOT import from services/, selectors/, or
    outer layers.

Invariants enforced:
    - Exactly one variant tag per row; the check constraint
      ``ck_client_variant_fields`` rejects rows carrying the other variant's
      field.
    - company_identifier is unique among companies (uq_client_company_identifier).
    - birthdate and company_identifier are never written after INSERT; the
      service update path only touches name, email and phone.

Failure modes:
    - IntegrityError on duplicate company_identifier.
    - IntegrityError when a row violates the variant check constraint.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, Enum as SAEnum, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from insurance_kernel.db.base import TrackedBase
from insurance_kernel.domain.dtos import ClientType

if TYPE_CHECKING:
    from insurance_kernel.models.contract import Contract


class Client(TrackedBase):
    """
    An insurance client: a natural person or a company.

    Contract:
        The variant is fixed at creation.  Contact fields (name, email,
        phone) are mutable; the variant field is not.

    Non-goals:
        - No subclass per variant.  Callers dispatch on ``client_type``.
        - No ORM cascade onto contracts.  Deleting a client end-dates its
          contracts explicitly (ClientService.delete_client) and keeps them.
    """

    __tablename__ = "clients"

    __table_args__ = (
        UniqueConstraint("company_identifier", name="uq_client_company_identifier"),
        CheckConstraint(
            "(client_type = 'PERSON' AND company_identifier IS NULL) OR "
            "(client_type = 'COMPANY' AND birthdate IS NULL)",
            name="ck_client_variant_fields",
        ),
        Index("idx_client_type", "client_type"),
    )

    client_type: Mapped[ClientType] = mapped_column(
        SAEnum(ClientType, native_enum=False, length=16),
        nullable=False,
        doc="Variant tag (PERSON or COMPANY)",
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    email: Mapped[str] = mapped_column(String(255), nullable=False)

    phone: Mapped[str] = mapped_column(String(32), nullable=False)

    birthdate: Mapped[date | None] = mapped_column(
        nullable=True,
        doc="PERSON only",
    )

    company_identifier: Mapped[str | None] = mapped_column(
        String(7),
        nullable=True,
        doc="COMPANY only, format aaa-123",
    )

    contracts: Mapped[list["Contract"]] = relationship(
        "Contract",
        primaryjoin="Client.id == foreign(Contract.client_id)",
        viewonly=True,
    )

    def __repr__(self) -> str:
        return f"<Client {self.client_type.value} {self.id}: {self.name}>"
