"""
ContractService -- contract creation, cost updates and active-contract queries.

Responsibility:
    Attaches new contracts to existing clients, updates contract costs, and
    answers the temporal queries: which of a client's contracts are active
    today (optionally only those last updated on a given date), and what
    they cost in total.

Architecture position:
    Kernel > Services -- imperative shell.  Reads go through
    ``ContractSelector`` (SQL push-down of the validity rule); writes use the
    session directly and flush only.

Invariants enforced:
    - Returns frozen ``ContractInfo`` / ``ContractSum`` DTOs.
    - The reference date for "active" is always ``self.clock.today()``.
    - start_date defaults to today; update_date is stamped on create and on
      every cost update.
    - Every query first checks the client exists: an unknown client is
      ClientNotFoundError, never an empty result.

Failure modes:
    - ClientNotFoundError: client lookup fails.
    - ContractNotFoundError: contract lookup fails.
    - InvalidInputError: cost amount fails validation.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import select

from insurance_kernel.domain.dtos import ContractInfo, ContractSum
from insurance_kernel.domain.validation import validate_cost_amount
from insurance_kernel.exceptions import ClientNotFoundError, ContractNotFoundError
from insurance_kernel.logging_config import get_logger
from insurance_kernel.models.client import Client
from insurance_kernel.models.contract import Contract
from insurance_kernel.selectors.contract_selector import (
    ContractSelector,
    to_contract_info,
)
from insurance_kernel.services.base import BaseService

logger = get_logger("services.contract")


class ContractService(BaseService[Contract]):
    """Service for contracts and per-client aggregation."""

    @property
    def selector(self) -> ContractSelector:
        return ContractSelector(self.session)

    def _require_client(self, client_id: UUID) -> None:
        stmt = select(Client.id).where(Client.id == client_id)
        if self.session.execute(stmt).first() is None:
            raise ClientNotFoundError(str(client_id))

    def _get_by_id(self, contract_id: UUID) -> Contract:
        contract = self.session.get(Contract, contract_id)
        if contract is None:
            raise ContractNotFoundError(str(contract_id))
        return contract

    def get_contract(self, contract_id: UUID) -> ContractInfo:
        """
        Get contract by ID.

        Raises:
            ContractNotFoundError: If contract doesn't exist.
        """
        return to_contract_info(self._get_by_id(contract_id))

    def create_contract(
        self,
        client_id: UUID,
        cost_amount: Decimal,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> ContractInfo:
        """
        Attach a new contract to an existing client.

        Args:
            client_id: Owning client.
            cost_amount: Positive amount with at most two decimals.
            start_date: Defaults to today when omitted.
            end_date: None for an open-ended contract.

        Raises:
            InvalidInputError: If cost_amount fails validation.
            ClientNotFoundError: If the client doesn't exist.
        """
        validate_cost_amount(cost_amount)
        self._require_client(client_id)

        contract = Contract.open(
            client_id=client_id,
            cost_amount=Decimal(cost_amount),
            today=self.clock.today(),
            start_date=start_date,
            end_date=end_date,
        )
        self.session.add(contract)
        self.session.flush()

        logger.info(
            "contract_created",
            extra={
                "contract_id": str(contract.id),
                "client_id": str(client_id),
                "cost_amount": contract.cost_amount,
                "start_date": contract.start_date,
                "end_date": contract.end_date,
            },
        )
        return to_contract_info(contract)

    def update_contract_cost(self, contract_id: UUID, cost_amount: Decimal) -> ContractInfo:
        """
        Replace the cost amount of a contract and stamp update_date.

        Raises:
            InvalidInputError: If cost_amount fails validation.
            ContractNotFoundError: If contract doesn't exist.
        """
        validate_cost_amount(cost_amount)
        contract = self._get_by_id(contract_id)

        previous = contract.cost_amount
        contract.cost_amount = Decimal(cost_amount)
        contract.touch(self.clock.today())
        self.session.flush()

        logger.info(
            "contract_cost_updated",
            extra={
                "contract_id": str(contract.id),
                "previous_cost_amount": previous,
                "cost_amount": contract.cost_amount,
            },
        )
        return to_contract_info(contract)

    def get_active_contracts(
        self,
        client_id: UUID,
        update_date: date | None = None,
    ) -> list[ContractInfo]:
        """
        Contracts of the client active today.

        Args:
            client_id: Client whose contracts to list.
            update_date: If given, only contracts last updated on exactly
                this date.

        Raises:
            ClientNotFoundError: If the client doesn't exist.
        """
        self._require_client(client_id)
        today = self.clock.today()

        if update_date is not None:
            return self.selector.active_for_client_updated_on(client_id, today, update_date)
        return self.selector.active_for_client(client_id, today)

    def get_active_contracts_sum(self, client_id: UUID) -> ContractSum:
        """
        Total cost of the client's contracts active today.

        Returns a zero total when nothing is active.

        Raises:
            ClientNotFoundError: If the client doesn't exist.
        """
        self._require_client(client_id)
        today = self.clock.today()
        total = self.selector.active_cost_sum(client_id, today)
        return ContractSum(client_id=client_id, total=total, reference_date=today)
