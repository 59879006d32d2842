"""
ContractSelector -- read-only contract queries pushed down to SQL.

Responsibility:
    Answers "which of this client's contracts are active" and "what do they
    cost in total" inside the database instead of loading every row.

Invariants enforced:
    The SQL predicate ``end_date IS NULL OR end_date > :reference_date`` is
    the same rule as ``domain.validity.is_active``: a contract ending on the
    reference date is excluded.  Results must match the pure functions row
    for row (tests/selectors/test_contract_selector.py checks parity).
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import ColumnElement, func, or_, select

from insurance_kernel.domain.dtos import ContractInfo
from insurance_kernel.models.contract import Contract
from insurance_kernel.selectors.base import BaseSelector

CENTS = Decimal("0.01")


def to_contract_info(contract: Contract) -> ContractInfo:
    """Convert an ORM Contract to a ContractInfo DTO."""
    return ContractInfo(
        id=contract.id,
        client_id=contract.client_id,
        start_date=contract.start_date,
        end_date=contract.end_date,
        cost_amount=contract.cost_amount,
        update_date=contract.update_date,
    )


def active_on(reference_date: date) -> ColumnElement[bool]:
    """SQL form of ``is_active`` for the given reference date."""
    return or_(Contract.end_date.is_(None), Contract.end_date > reference_date)


class ContractSelector(BaseSelector[Contract]):
    """Read-only queries over a client's contracts."""

    def active_for_client(
        self,
        client_id: UUID,
        reference_date: date,
    ) -> list[ContractInfo]:
        """Contracts of the client active on reference_date."""
        stmt = (
            select(Contract)
            .where(Contract.client_id == client_id, active_on(reference_date))
            .order_by(Contract.start_date, Contract.id)
        )
        return [to_contract_info(c) for c in self.session.scalars(stmt)]

    def active_for_client_updated_on(
        self,
        client_id: UUID,
        reference_date: date,
        update_date: date,
    ) -> list[ContractInfo]:
        """Active contracts of the client last mutated exactly on update_date."""
        stmt = (
            select(Contract)
            .where(
                Contract.client_id == client_id,
                active_on(reference_date),
                Contract.update_date == update_date,
            )
            .order_by(Contract.start_date, Contract.id)
        )
        return [to_contract_info(c) for c in self.session.scalars(stmt)]

    def active_cost_sum(self, client_id: UUID, reference_date: date) -> Decimal:
        """Sum of cost_amount over active contracts; zero when there are none."""
        stmt = select(func.coalesce(func.sum(Contract.cost_amount), 0)).where(
            Contract.client_id == client_id,
            active_on(reference_date),
        )
        total = self.session.execute(stmt).scalar_one()
        return Decimal(str(total)).quantize(CENTS)
