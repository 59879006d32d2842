"""FastAPI dependencies: one transaction per request, services bound to it."""

from typing import Generator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from insurance_kernel.db.engine import session_scope
from insurance_kernel.services.client_service import ClientService
from insurance_kernel.services.contract_service import ContractService


def get_db() -> Generator[Session, None, None]:
    """Session committed when the endpoint returns, rolled back if it raises."""
    with session_scope() as session:
        yield session


def get_client_service(request: Request, db: Session = Depends(get_db)) -> ClientService:
    state = request.app.state
    return ClientService(db, state.clock, strict_cascade=state.settings.strict_cascade)


def get_contract_service(request: Request, db: Session = Depends(get_db)) -> ContractService:
    return ContractService(db, request.app.state.clock)
