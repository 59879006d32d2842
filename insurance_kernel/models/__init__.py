"""Domain models for the insurance kernel."""

from insurance_kernel.models.client import Client
from insurance_kernel.models.contract import Contract

__all__ = [
    "Client",
    "Contract",
]
