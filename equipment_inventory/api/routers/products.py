from __future__ import annotations

from fastapi import APIRouter, Depends, status

from equipment_inventory.api.deps import get_equipment_service
from equipment_inventory.core.security import require_admin
from equipment_inventory.schemas.common import ErrorResponse
from equipment_inventory.schemas.equipment import (
    EquipmentCreateRequest,
    EquipmentDTO,
    EquipmentUpdateRequest,
)
from equipment_inventory.services.equipments import EquipmentService

router = APIRouter(prefix="/api/products", tags=["products"])

_ADMIN = [Depends(require_admin)]


@router.get(
    "",
    response_model=list[EquipmentDTO],
    responses={500: {"model": ErrorResponse}},
    summary="List equipment",
)
async def list_products(svc: EquipmentService = Depends(get_equipment_service)):
    return await svc.list()


@router.post(
    "",
    response_model=EquipmentDTO,
    status_code=status.HTTP_201_CREATED,
    dependencies=_ADMIN,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Create equipment",
    description="`name` and `quantity` are required; `requiredQuantity` defaults to 0.",
)
async def create_product(
    payload: EquipmentCreateRequest,
    svc: EquipmentService = Depends(get_equipment_service),
):
    return await svc.create(payload)


@router.get(
    "/{equipment_id}",
    response_model=EquipmentDTO,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Get one equipment row",
)
async def get_product(
    equipment_id: str,
    svc: EquipmentService = Depends(get_equipment_service),
):
    return await svc.get(equipment_id)


@router.put(
    "/{equipment_id}",
    response_model=EquipmentDTO,
    dependencies=_ADMIN,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Partially update equipment",
    description="Only the fields present in the body are written.",
)
async def update_product(
    equipment_id: str,
    payload: EquipmentUpdateRequest,
    svc: EquipmentService = Depends(get_equipment_service),
):
    return await svc.update(equipment_id, payload)


@router.delete(
    "/{equipment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=_ADMIN,
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Delete equipment",
)
async def delete_product(
    equipment_id: str,
    svc: EquipmentService = Depends(get_equipment_service),
):
    await svc.delete(equipment_id)
    return None
