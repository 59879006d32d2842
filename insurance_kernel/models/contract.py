"""
Module: insurance_kernel.models.contract
Responsibility: ORM persistence for insurance contracts: the validity window
    (start_date / end_date), the cost amount, and the date of last mutation.
Architecture position: Kernel > Models.  May import from db/base.py only.
    MUST NOT import from services/, selectors/, domain/, or outer layers.

Invariants enforced:
    - cost_amount > 0 (ck_contract_cost_positive), two fractional digits.
    - start_date is never NULL: ``Contract.open`` defaults it to the creation
      date.
    - update_date is stamped by ``open`` and ``touch`` from a caller-supplied
      date, on create and on every mutation.
    - client_id is a back-reference only.  It is not a foreign key: contracts
      outlive their client as end-dated history once the client is deleted.

Failure modes:
    - IntegrityError when cost_amount <= 0 reaches the database.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import CheckConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column

from insurance_kernel.db.base import TrackedBase, UUIDString


class Contract(TrackedBase):
    """
    An insurance contract held by a client.

    Contract:
        A contract is active while ``end_date`` is NULL or later than the
        reference date (see domain.validity).  Cost updates and the delete
        cascade are the only mutation paths; both call ``touch``.
    """

    __tablename__ = "contracts"

    __table_args__ = (
        CheckConstraint("cost_amount > 0", name="ck_contract_cost_positive"),
        Index("idx_contract_client_id", "client_id"),
        Index("idx_contract_end_date", "end_date"),
        Index("idx_contract_update_date", "update_date"),
    )

    client_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        nullable=False,
        doc="Owning client (back-reference, no FK)",
    )

    start_date: Mapped[date] = mapped_column(nullable=False)

    end_date: Mapped[date | None] = mapped_column(
        nullable=True,
        doc="NULL means open-ended",
    )

    cost_amount: Mapped[Decimal] = mapped_column(nullable=False)

    update_date: Mapped[date] = mapped_column(nullable=False)

    @classmethod
    def open(
        cls,
        client_id: UUID,
        cost_amount: Decimal,
        today: date,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> Contract:
        """Build a new contract, defaulting start_date to today."""
        return cls(
            client_id=client_id,
            start_date=start_date if start_date is not None else today,
            end_date=end_date,
            cost_amount=cost_amount,
            update_date=today,
        )

    def touch(self, today: date) -> None:
        """Record a mutation made on ``today``."""
        self.update_date = today

    def end_on(self, today: date) -> None:
        """Close the validity window on ``today``."""
        self.end_date = today
        self.touch(today)

    def __repr__(self) -> str:
        return (
            f"<Contract {self.id} client={self.client_id} "
            f"{self.start_date}..{self.end_date} {self.cost_amount}>"
        )
