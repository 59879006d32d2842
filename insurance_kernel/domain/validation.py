"""
Field validation for client and contract input.

Pure checks with no I/O.  Each ``validate_*`` function collects every
violation and raises a single ``InvalidInputError`` whose ``field_errors``
lists them, or returns None when the input is acceptable.  The kernel
models and services assume their input already passed through here.
"""

from __future__ import annotations

import re
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any

from insurance_kernel.domain.dtos import (
    ClientSpec,
    ClientType,
    ClientUpdate,
    CompanyDetails,
    PersonDetails,
)
from insurance_kernel.exceptions import InvalidInputError, UnknownClientTypeError

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+$")
# E.164; creation demands a full subscriber number, updates only the E.164 shape.
PHONE_PATTERN = re.compile(r"^\+?[1-9]\d{10,14}$")
UPDATE_PHONE_PATTERN = re.compile(r"^\+?[1-9]\d{1,14}$")
COMPANY_IDENTIFIER_PATTERN = re.compile(r"^[a-zA-Z]{3}-\d{3}$")

MIN_COST_AMOUNT = Decimal("0.01")
MAX_INTEGER_DIGITS = 17
MAX_FRACTION_DIGITS = 2


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _check_contact(
    name: Any,
    email: Any,
    phone: Any,
    phone_pattern: re.Pattern[str],
) -> list[dict[str, str]]:
    errors: list[dict[str, str]] = []

    if _blank(name):
        errors.append({"field": "name", "message": "Name is required"})
    elif not NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH:
        errors.append({
            "field": "name",
            "message": f"Name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters",
        })

    if _blank(email):
        errors.append({"field": "email", "message": "Email is required"})
    elif not EMAIL_PATTERN.match(email):
        errors.append({"field": "email", "message": "Email must be valid"})

    if _blank(phone):
        errors.append({"field": "phone", "message": "Phone is required"})
    elif not phone_pattern.match(phone):
        errors.append({
            "field": "phone",
            "message": "Phone number must be valid (E.164 format)",
        })

    return errors


def validate_client_spec(spec: ClientSpec, today: date) -> None:
    """
    Validate a client creation request.

    Raises:
        UnknownClientTypeError: If the tag is not a known ClientType, or the
            details payload belongs to the other variant.
        InvalidInputError: If any field constraint fails.
    """
    try:
        client_type = ClientType(spec.client_type)
    except ValueError:
        raise UnknownClientTypeError(spec.client_type) from None

    errors = _check_contact(spec.name, spec.email, spec.phone, PHONE_PATTERN)

    match client_type:
        case ClientType.PERSON:
            if not isinstance(spec.details, PersonDetails):
                raise UnknownClientTypeError(spec.client_type)
            birthdate = spec.details.birthdate
            if birthdate is None:
                errors.append({"field": "birthdate", "message": "Birthdate is required"})
            elif birthdate >= today:
                errors.append({"field": "birthdate", "message": "Birthdate must be in the past"})
        case ClientType.COMPANY:
            if not isinstance(spec.details, CompanyDetails):
                raise UnknownClientTypeError(spec.client_type)
            identifier = spec.details.company_identifier
            if _blank(identifier):
                errors.append({
                    "field": "company_identifier",
                    "message": "Company identifier is required",
                })
            elif not COMPANY_IDENTIFIER_PATTERN.match(identifier):
                errors.append({
                    "field": "company_identifier",
                    "message": "Company identifier must match format: aaa-123",
                })

    if errors:
        raise InvalidInputError(errors)


def validate_client_update(update: ClientUpdate) -> None:
    """Validate the mutable contact fields of a client."""
    errors = _check_contact(update.name, update.email, update.phone, UPDATE_PHONE_PATTERN)
    if errors:
        raise InvalidInputError(errors)


def validate_cost_amount(amount: Any, field: str = "cost_amount") -> None:
    """
    Validate a contract cost amount.

    Must be a finite Decimal >= 0.01 with at most 17 integer and 2
    fractional digits.
    """
    if amount is None:
        raise InvalidInputError([{"field": field, "message": "Cost amount is required"}])
    try:
        value = Decimal(amount) if not isinstance(amount, Decimal) else amount
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidInputError(
            [{"field": field, "message": "Cost amount must be a decimal number"}]
        ) from None
    if not value.is_finite():
        raise InvalidInputError(
            [{"field": field, "message": "Cost amount must be a decimal number"}]
        )

    errors: list[dict[str, str]] = []
    if value < MIN_COST_AMOUNT:
        errors.append({"field": field, "message": "Cost amount must be greater than 0"})

    exponent = value.as_tuple().exponent
    fraction_digits = -exponent if exponent < 0 else 0
    integer_digits = max(value.adjusted() + 1, 0)
    if fraction_digits > MAX_FRACTION_DIGITS or integer_digits > MAX_INTEGER_DIGITS:
        errors.append({
            "field": field,
            "message": "Cost amount must have at most 2 decimal places",
        })

    if errors:
        raise InvalidInputError(errors)
