"""Kernel services (imperative shell): flush-only, caller owns the transaction."""

from insurance_kernel.services.client_service import ClientService
from insurance_kernel.services.contract_service import ContractService

__all__ = ["ClientService", "ContractService"]
