"""
ClientService -- client lifecycle: create, read, update, delete.

Responsibility:
    Creates persons and companies from validated specs, updates their
    contact fields, and deletes them.  Deletion is a two-phase cascade:
    the client's still-open contracts are end-dated to today and persisted,
    then the client row is removed.  Contracts are kept as history.

Architecture position:
    Kernel > Services -- imperative shell.  Called by the HTTP layer and
    scripts inside a ``session_scope()`` transaction.

Invariants enforced:
    - Returns frozen ``ClientInfo`` DTOs, never ORM entities.
    - Flush-only: never commits or rolls back the session, so the cascade
      and the delete land in the caller's single transaction.
    - update_client only writes name, email and phone.  birthdate and
      company_identifier are immutable after creation.
    - delete_client end-dates exactly the contracts that are active today;
      contracts ending today or earlier are not touched.

Failure modes:
    - ClientNotFoundError: lookup by ID fails (get, update, delete).
    - UnknownClientTypeError / InvalidInputError: the ClientSpec fails validation.
    - InvalidInputError: company_identifier already used by another client.
    - ContractCascadeError: end-dated batch not fully persisted and
      ``strict_cascade`` is enabled.  Otherwise the mismatch is logged at
      ERROR as ``contract_cascade_incomplete`` and the delete proceeds.
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import inspect, select
from sqlalchemy.orm import Session

from insurance_kernel.domain.clock import Clock
from insurance_kernel.domain.dtos import (
    ClientInfo,
    ClientSpec,
    ClientType,
    ClientUpdate,
    CompanyDetails,
    PersonDetails,
)
from insurance_kernel.domain.validation import validate_client_spec, validate_client_update
from insurance_kernel.domain.validity import should_end_date
from insurance_kernel.exceptions import (
    ClientNotFoundError,
    ContractCascadeError,
    InvalidInputError,
    UnknownClientTypeError,
)
from insurance_kernel.logging_config import get_logger
from insurance_kernel.models.client import Client
from insurance_kernel.models.contract import Contract
from insurance_kernel.services.base import BaseService

logger = get_logger("services.client")


def to_client_info(client: Client) -> ClientInfo:
    """Convert an ORM Client to a ClientInfo DTO, dispatching on the tag."""
    match client.client_type:
        case ClientType.PERSON:
            details = PersonDetails(birthdate=client.birthdate)
        case ClientType.COMPANY:
            details = CompanyDetails(company_identifier=client.company_identifier)
        case _:
            raise UnknownClientTypeError(client.client_type)
    return ClientInfo(
        id=client.id,
        client_type=client.client_type,
        name=client.name,
        email=client.email,
        phone=client.phone,
        details=details,
    )


class ClientService(BaseService[Client]):
    """
    Service for the client lifecycle.

    Args (constructor):
        session: SQLAlchemy session owned by the caller.
        clock: Source of "today" for validation and the delete cascade.
        strict_cascade: Raise ContractCascadeError instead of logging when
            the end-dated contracts are not all persisted.
    """

    def __init__(
        self,
        session: Session,
        clock: Clock | None = None,
        strict_cascade: bool = False,
    ):
        super().__init__(session, clock)
        self.strict_cascade = strict_cascade

    def _get_by_id(self, client_id: UUID) -> Client:
        """Get client by ID, raising if not found."""
        client = self.session.get(Client, client_id)
        if client is None:
            raise ClientNotFoundError(str(client_id))
        return client

    def create_client(self, spec: ClientSpec) -> ClientInfo:
        """
        Persist a new person or company.

        Args:
            spec: Tagged client spec.

        Returns:
            ClientInfo with the newly assigned id.

        Raises:
            UnknownClientTypeError: If spec is not a ClientSpec or its tag
                is not recognized.
            InvalidInputError: If any field constraint fails, or the company
                identifier is already taken.
        """
        if not isinstance(spec, ClientSpec):
            raise UnknownClientTypeError(type(spec).__name__)
        validate_client_spec(spec, self.clock.today())
        if isinstance(spec.details, CompanyDetails):
            self._require_unique_identifier(spec.details.company_identifier)

        client = Client(
            client_type=ClientType(spec.client_type),
            name=spec.name,
            email=spec.email,
            phone=spec.phone,
        )
        match spec.details:
            case PersonDetails(birthdate=birthdate):
                client.birthdate = birthdate
            case CompanyDetails(company_identifier=identifier):
                client.company_identifier = identifier

        self.session.add(client)
        self.session.flush()

        logger.info(
            "client_created",
            extra={"client_id": str(client.id), "client_type": client.client_type.value},
        )
        return to_client_info(client)

    def _require_unique_identifier(self, identifier: str) -> None:
        stmt = select(Client.id).where(Client.company_identifier == identifier)
        if self.session.execute(stmt).first() is not None:
            raise InvalidInputError([{
                "field": "company_identifier",
                "message": "Company identifier already exists",
            }])

    def get_client(self, client_id: UUID) -> ClientInfo:
        """
        Get client by ID.

        Raises:
            ClientNotFoundError: If client doesn't exist.
        """
        return to_client_info(self._get_by_id(client_id))

    def update_client(self, client_id: UUID, update: ClientUpdate) -> ClientInfo:
        """
        Overwrite the contact fields of a client.

        Variant fields (birthdate, company_identifier) are never touched.

        Raises:
            ClientNotFoundError: If client doesn't exist.
            InvalidInputError: If any field constraint fails.
        """
        validate_client_update(update)
        client = self._get_by_id(client_id)

        client.name = update.name
        client.email = update.email
        client.phone = update.phone
        self.session.flush()

        logger.info("client_updated", extra={"client_id": str(client.id)})
        return to_client_info(client)

    def delete_client(self, client_id: UUID) -> None:
        """
        Delete a client, end-dating its open contracts first.

        Steps, all inside the caller's transaction:
            1. Load the client (ClientNotFoundError if absent).
            2. Load all of its contracts, locking them FOR UPDATE.
            3. Set end_date = today on each contract still active today.
            4. Persist the batch and compare persisted vs loaded counts.
            5. Delete the client row.

        Raises:
            ClientNotFoundError: If client doesn't exist.
            ContractCascadeError: If strict_cascade and step 4 mismatches.
        """
        client = self._get_by_id(client_id)
        today = self.clock.today()

        stmt = (
            select(Contract)
            .where(Contract.client_id == client.id)
            .with_for_update()
        )
        contracts = list(self.session.scalars(stmt))

        end_dated = 0
        for contract in contracts:
            if should_end_date(contract, today):
                contract.end_on(today)
                end_dated += 1

        saved = self._save_all(contracts)
        if len(saved) != len(contracts):
            if self.strict_cascade:
                raise ContractCascadeError(str(client.id), len(contracts), len(saved))
            logger.error(
                "contract_cascade_incomplete",
                extra={
                    "client_id": str(client.id),
                    "expected": len(contracts),
                    "persisted": len(saved),
                },
            )

        logger.info(
            "contracts_end_dated",
            extra={
                "client_id": str(client.id),
                "contract_count": len(contracts),
                "end_dated_count": end_dated,
                "end_date": today,
            },
        )

        self.session.delete(client)
        self.session.flush()

        logger.info("client_deleted", extra={"client_id": str(client.id)})

    def _save_all(self, contracts: list[Contract]) -> list[Contract]:
        """Flush the batch and return the contracts that are now persistent."""
        self.session.add_all(contracts)
        self.session.flush()
        return [c for c in contracts if inspect(c).persistent]
