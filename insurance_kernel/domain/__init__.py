"""
Pure domain layer.

Data transfer objects, validation and temporal-validity logic with NO
dependencies on the ORM, the database, the wall clock, or I/O.
"""

from insurance_kernel.domain.clock import Clock, DeterministicClock, SystemClock
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
from insurance_kernel.domain.validity import (
    filter_active,
    filter_active_and_updated_on,
    is_active,
    sum_active,
)

__all__ = [
    "Clock",
    "DeterministicClock",
    "SystemClock",
    "ClientInfo",
    "ClientSpec",
    "ClientType",
    "ClientUpdate",
    "CompanyDetails",
    "ContractInfo",
    "ContractSum",
    "PersonDetails",
    "filter_active",
    "filter_active_and_updated_on",
    "is_active",
    "sum_active",
]
