"""
Temporal validity -- pure classification of contracts as active or expired.

Responsibility:
    Decides, for an explicit reference date, whether a contract is still in
    force, and filters or sums collections of contracts accordingly.  Also
    owns the cascade predicate used when a client is deleted.

Architecture position:
    Kernel > Domain -- pure functional core.  No ORM, no session, no clock:
    the reference date is always an argument.

Invariants enforced:
    - A contract is active iff ``end_date is None or end_date > reference``.
      A contract ending ON the reference date is NOT active.
    - ``sum_active`` of nothing is ``Decimal("0")``, never an error.
    - The push-down queries in ``selectors.contract_selector`` must return
      exactly what these functions return for the same rows.

Works on anything exposing ``end_date``, ``update_date`` and
``cost_amount`` attributes (ORM ``Contract`` rows or ``ContractInfo`` DTOs).

Services answer list and sum queries through ``ContractSelector``, which
pushes the same rule into SQL.  ``filter_active``, ``filter_active_and_updated_on``
and ``sum_active`` are the in-memory reference those queries are tested
against; ``should_end_date`` drives the delete cascade directly.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Iterable, Protocol, TypeVar


class DatedContract(Protocol):
    end_date: date | None
    update_date: date
    cost_amount: Decimal


C = TypeVar("C", bound=DatedContract)

ZERO = Decimal("0")


def is_active(contract: DatedContract, reference_date: date) -> bool:
    """True if the contract is open-ended or ends strictly after reference_date."""
    return contract.end_date is None or contract.end_date > reference_date


def filter_active(contracts: Iterable[C], reference_date: date) -> list[C]:
    """All contracts active on reference_date, in input order."""
    return [c for c in contracts if is_active(c, reference_date)]


def filter_active_and_updated_on(
    contracts: Iterable[C],
    reference_date: date,
    update_date: date,
) -> list[C]:
    """Active contracts whose last mutation happened exactly on update_date."""
    return [
        c
        for c in contracts
        if is_active(c, reference_date) and c.update_date == update_date
    ]


def sum_active(contracts: Iterable[DatedContract], reference_date: date) -> Decimal:
    """Total cost_amount of the contracts active on reference_date."""
    return sum(
        (c.cost_amount for c in contracts if is_active(c, reference_date)),
        ZERO,
    )


def should_end_date(contract: DatedContract, today: date) -> bool:
    """
    Whether deleting the owning client must close this contract today.

    Contracts already ending today or earlier are left untouched.
    """
    return is_active(contract, today)
