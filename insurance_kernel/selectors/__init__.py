"""Read-only query selectors."""

from insurance_kernel.selectors.contract_selector import ContractSelector

__all__ = ["ContractSelector"]
