"""
Domain DTOs for clients and contracts.

Services return these frozen dataclasses, never ORM entities, so callers
cannot mutate persistent state behind the session's back.

A client is a tagged union: ``client_type`` is the tag and ``details`` carries
the variant payload (``PersonDetails`` or ``CompanyDetails``).  Code that needs
variant data matches on the tag.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from uuid import UUID


class ClientType(str, Enum):
    """Client variant tag."""

    PERSON = "PERSON"
    COMPANY = "COMPANY"


@dataclass(frozen=True)
class PersonDetails:
    birthdate: date


@dataclass(frozen=True)
class CompanyDetails:
    company_identifier: str


ClientDetails = PersonDetails | CompanyDetails


@dataclass(frozen=True)
class ClientSpec:
    """Input for creating a client."""

    client_type: ClientType
    name: str
    email: str
    phone: str
    details: ClientDetails

    @classmethod
    def person(cls, name: str, email: str, phone: str, birthdate: date) -> ClientSpec:
        return cls(ClientType.PERSON, name, email, phone, PersonDetails(birthdate))

    @classmethod
    def company(
        cls, name: str, email: str, phone: str, company_identifier: str
    ) -> ClientSpec:
        return cls(
            ClientType.COMPANY, name, email, phone, CompanyDetails(company_identifier)
        )


@dataclass(frozen=True)
class ClientUpdate:
    """The mutable contact fields of a client."""

    name: str
    email: str
    phone: str


@dataclass(frozen=True)
class ClientInfo:
    """Immutable view of a persisted client."""

    id: UUID
    client_type: ClientType
    name: str
    email: str
    phone: str
    details: ClientDetails


@dataclass(frozen=True)
class ContractInfo:
    """Immutable view of a persisted contract."""

    id: UUID
    client_id: UUID
    start_date: date
    end_date: date | None
    cost_amount: Decimal
    update_date: date


@dataclass(frozen=True)
class ContractSum:
    """Total cost of a client's active contracts on reference_date."""

    client_id: UUID
    total: Decimal
    reference_date: date
