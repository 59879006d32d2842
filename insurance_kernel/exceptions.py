"""
Typed Exception Hierarchy for the Insurance Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Callers (the HTTP layer, scripts, tests) must react to errors by type, not
by parsing messages.  Every exception here:
  1. Has a TYPED class (catch by type, not message)
  2. Has a CODE class attribute (machine-readable, API-safe)
  3. Carries structured DATA as attributes (client_id, field_errors, ...)

Example - RIGHT way:
    try:
        service.get_client(client_id)
    except ClientNotFoundError as e:
        api_response(status=404, code=e.code, client_id=e.client_id)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    InsuranceKernelError (base)
    |
    +-- NotFoundError
    |   +-- ClientNotFoundError
    |   +-- ContractNotFoundError
    |
    +-- InvalidInputError
    |   +-- UnknownClientTypeError
    |
    +-- ContractCascadeError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category   | Code                         | When Raised
-----------|------------------------------|-------------------------------------
Lookup     | CLIENT_NOT_FOUND             | Client ID doesn't resolve
           | CONTRACT_NOT_FOUND           | Contract ID doesn't resolve
-----------|------------------------------|-------------------------------------
Input      | INVALID_INPUT                | Field constraint violated
           | UNKNOWN_CLIENT_TYPE          | Client variant tag not recognized
-----------|------------------------------|-------------------------------------
Cascade    | CONTRACT_CASCADE_INCOMPLETE  | End-dated batch not fully persisted
           |                              | (only when strict_cascade is on)

===============================================================================
"""

from __future__ import annotations

from typing import Any


class InsuranceKernelError(Exception):
    """
    Base exception for all insurance kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "INSURANCE_KERNEL_ERROR"


# Lookup exceptions


class NotFoundError(InsuranceKernelError):
    """Base exception for ids that do not resolve to a stored entity."""

    code: str = "NOT_FOUND"


class ClientNotFoundError(NotFoundError):
    """Client with given ID was not found."""

    code: str = "CLIENT_NOT_FOUND"

    def __init__(self, client_id: str):
        self.client_id = client_id
        super().__init__(f"Client not found with id: {client_id}")


class ContractNotFoundError(NotFoundError):
    """Contract with given ID was not found."""

    code: str = "CONTRACT_NOT_FOUND"

    def __init__(self, contract_id: str):
        self.contract_id = contract_id
        super().__init__(f"Contract not found with id: {contract_id}")


# Input exceptions


class InvalidInputError(InsuranceKernelError):
    """
    Input failed one or more field constraints.

    field_errors is a list of {"field": ..., "message": ...} dicts so the
    transport layer can report every violation at once.
    """

    code: str = "INVALID_INPUT"

    def __init__(self, field_errors: list[dict[str, Any]]):
        self.field_errors = field_errors
        fields = ", ".join(e["field"] for e in field_errors)
        super().__init__(
            f"Invalid input: {len(field_errors)} error(s) on {fields}"
        )


class UnknownClientTypeError(InvalidInputError):
    """Client variant tag is not PERSON or COMPANY."""

    code: str = "UNKNOWN_CLIENT_TYPE"

    def __init__(self, client_type: Any):
        self.client_type = client_type
        super().__init__(
            [{"field": "type", "message": f"Unknown client type: {client_type!r}"}]
        )


# Cascade exceptions


class ContractCascadeError(InsuranceKernelError):
    """
    End-dated contracts were not all persisted while deleting a client.

    Raised only when strict cascade mode is enabled; otherwise the mismatch
    is logged and the deletion proceeds.
    """

    code: str = "CONTRACT_CASCADE_INCOMPLETE"

    def __init__(self, client_id: str, expected: int, persisted: int):
        self.client_id = client_id
        self.expected = expected
        self.persisted = persisted
        super().__init__(
            f"Contracts were not correctly saved for client {client_id}: "
            f"expected {expected}, persisted {persisted}"
        )
