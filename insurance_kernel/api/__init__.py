"""HTTP API (FastAPI) over the kernel services."""

from insurance_kernel.api.app import create_app

__all__ = ["create_app"]
