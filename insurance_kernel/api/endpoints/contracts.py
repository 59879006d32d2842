"""Contract endpoints: /api/contracts."""

from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from insurance_kernel.api.dependencies import get_contract_service
from insurance_kernel.api.schemas import ContractCostIn, ContractIn, ContractOut, ContractSumOut
from insurance_kernel.services.contract_service import ContractService

router = APIRouter(prefix="/contracts", tags=["Contracts"])


@router.post("", response_model=ContractOut, status_code=status.HTTP_201_CREATED)
def create_contract(payload: ContractIn, service: ContractService = Depends(get_contract_service)):
    info = service.create_contract(
        client_id=payload.client_id,
        cost_amount=payload.cost_amount,
        start_date=payload.start_date,
        end_date=payload.end_date,
    )
    return ContractOut.from_info(info)


@router.patch("/{contract_id}/cost", response_model=ContractOut)
def update_contract_cost(
    contract_id: UUID,
    payload: ContractCostIn,
    service: ContractService = Depends(get_contract_service),
):
    return ContractOut.from_info(service.update_contract_cost(contract_id, payload.cost_amount))


@router.get("/client/{client_id}", response_model=list[ContractOut])
def get_active_contracts(
    client_id: UUID,
    update_date: Optional[date] = Query(None, alias="updateDate"),
    service: ContractService = Depends(get_contract_service),
):
    return [ContractOut.from_info(c) for c in service.get_active_contracts(client_id, update_date)]


@router.get("/client/{client_id}/sum", response_model=ContractSumOut)
def get_active_contracts_sum(
    client_id: UUID,
    service: ContractService = Depends(get_contract_service),
):
    return ContractSumOut.from_sum(service.get_active_contracts_sum(client_id))
