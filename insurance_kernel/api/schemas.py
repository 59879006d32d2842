"""
Request and response bodies for the HTTP API.

Field names are camelCase on the wire and snake_case in Python.  These
models only shape and type-check JSON; field rules (lengths, formats,
positivity) live in ``insurance_kernel.domain.validation`` and surface as
400 responses with the kernel's INVALID_INPUT code.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Annotated, Literal, Optional, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from insurance_kernel.domain.dtos import (
    ClientInfo,
    ClientSpec,
    ClientType,
    ClientUpdate,
    CompanyDetails,
    ContractInfo,
    ContractSum,
    PersonDetails,
)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Clients
# ---------------------------------------------------------------------------


class PersonIn(CamelModel):
    type: Literal["PERSON"]
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    birthdate: Optional[date] = None

    def to_spec(self) -> ClientSpec:
        return ClientSpec(
            ClientType.PERSON, self.name, self.email, self.phone,
            PersonDetails(self.birthdate),
        )


class CompanyIn(CamelModel):
    type: Literal["COMPANY"]
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    company_identifier: Optional[str] = None

    def to_spec(self) -> ClientSpec:
        return ClientSpec(
            ClientType.COMPANY, self.name, self.email, self.phone,
            CompanyDetails(self.company_identifier),
        )


ClientIn = Annotated[Union[PersonIn, CompanyIn], Field(discriminator="type")]


class ClientUpdateIn(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None

    def to_update(self) -> ClientUpdate:
        return ClientUpdate(name=self.name, email=self.email, phone=self.phone)


class PersonOut(CamelModel):
    type: Literal["PERSON"] = "PERSON"
    id: UUID
    name: str
    email: str
    phone: str
    birthdate: date


class CompanyOut(CamelModel):
    type: Literal["COMPANY"] = "COMPANY"
    id: UUID
    name: str
    email: str
    phone: str
    company_identifier: str


ClientOut = Annotated[Union[PersonOut, CompanyOut], Field(discriminator="type")]


def client_out(info: ClientInfo) -> PersonOut | CompanyOut:
    """Render a ClientInfo, dispatching on its tag."""
    match info.details:
        case PersonDetails(birthdate=birthdate):
            return PersonOut(
                id=info.id, name=info.name, email=info.email, phone=info.phone,
                birthdate=birthdate,
            )
        case CompanyDetails(company_identifier=identifier):
            return CompanyOut(
                id=info.id, name=info.name, email=info.email, phone=info.phone,
                company_identifier=identifier,
            )
    raise ValueError(f"Unknown client details: {info.details!r}")


# ---------------------------------------------------------------------------
# Contracts
# ---------------------------------------------------------------------------


class ContractIn(CamelModel):
    client_id: UUID
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    cost_amount: Optional[Decimal] = None


class ContractCostIn(CamelModel):
    cost_amount: Optional[Decimal] = None


class ContractOut(CamelModel):
    id: UUID
    start_date: date
    end_date: Optional[date]
    cost_amount: Decimal

    @classmethod
    def from_info(cls, info: ContractInfo) -> ContractOut:
        return cls(
            id=info.id,
            start_date=info.start_date,
            end_date=info.end_date,
            cost_amount=info.cost_amount,
        )


class ContractSumOut(CamelModel):
    client_id: UUID
    total: Decimal
    reference_date: date

    @classmethod
    def from_sum(cls, result: ContractSum) -> ContractSumOut:
        return cls(
            client_id=result.client_id,
            total=result.total,
            reference_date=result.reference_date,
        )


class ErrorOut(BaseModel):
    code: str
    message: str
    details: list[dict] = Field(default_factory=list)
