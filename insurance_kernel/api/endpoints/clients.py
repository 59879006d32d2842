"""Client endpoints: /api/clients."""

from uuid import UUID

from fastapi import APIRouter, Body, Depends, Response, status

from insurance_kernel.api.dependencies import get_client_service
from insurance_kernel.api.schemas import ClientIn, ClientOut, ClientUpdateIn, client_out
from insurance_kernel.services.client_service import ClientService

router = APIRouter(prefix="/clients", tags=["Clients"])


@router.post("", response_model=ClientOut, status_code=status.HTTP_201_CREATED)
def create_client(
    payload: ClientIn = Body(...),
    service: ClientService = Depends(get_client_service),
):
    return client_out(service.create_client(payload.to_spec()))


@router.get("/{client_id}", response_model=ClientOut)
def get_client(client_id: UUID, service: ClientService = Depends(get_client_service)):
    return client_out(service.get_client(client_id))


@router.put("/{client_id}", response_model=ClientOut)
def update_client(
    client_id: UUID,
    payload: ClientUpdateIn,
    service: ClientService = Depends(get_client_service),
):
    return client_out(service.update_client(client_id, payload.to_update()))


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_client(client_id: UUID, service: ClientService = Depends(get_client_service)):
    service.delete_client(client_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
