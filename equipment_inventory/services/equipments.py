from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager

import structlog

from equipment_inventory.core.exceptions import (
    ConflictError,
    InfrastructureError,
    NotFoundError,
    StoreOperationError,
    ValidationError,
)
from equipment_inventory.infra.unit_of_work import UnitOfWork
from equipment_inventory.schemas.equipment import (
    EquipmentCreateRequest,
    EquipmentDTO,
    EquipmentUpdateRequest,
)

MISSING_FIELDS_MESSAGE = "Missing required fields: name, quantity"
NEGATIVE_COUNT_MESSAGE = "quantity and requiredQuantity must be non-negative integers"
EMPTY_NAME_MESSAGE = "name must not be empty"
NOT_FOUND_MESSAGE = "Product not found"
# counts are stored in int4 columns
MAX_COUNT = 2**31 - 1
COUNT_TOO_LARGE_MESSAGE = f"quantity and requiredQuantity must not exceed {MAX_COUNT}"

logger = structlog.get_logger(__name__)


@contextmanager
def _store_call(message: str, **context) -> Iterator[None]:
    """Log store failures and re-raise them with a caller-safe message."""
    try:
        yield
    except (ConflictError, InfrastructureError) as exc:
        logger.error("equipment_store_failed", failure=message, exc_info=exc, **context)
        raise StoreOperationError(message) from exc


def _check_counts(*values: int | None) -> None:
    if any(v is not None and v < 0 for v in values):
        raise ValidationError(NEGATIVE_COUNT_MESSAGE)
    if any(v is not None and v > MAX_COUNT for v in values):
        raise ValidationError(COUNT_TOO_LARGE_MESSAGE)


def _check_id(equipment_id: str) -> None:
    # PostgreSQL text cannot hold NUL, so no row can have such an id
    if "\x00" in equipment_id:
        raise NotFoundError(NOT_FOUND_MESSAGE)


class EquipmentService:
    def __init__(self, uow_factory: Callable[[], UnitOfWork]):
        self._uow_factory = uow_factory

    async def list(self) -> list[EquipmentDTO]:
        with _store_call("Failed to fetch products"):
            async with self._uow_factory() as uow:
                rows = await uow.equipments.list_all()
        return [EquipmentDTO.model_validate(r) for r in rows]

    async def get(self, equipment_id: str) -> EquipmentDTO:
        _check_id(equipment_id)
        with _store_call("Failed to fetch product", equipment_id=equipment_id):
            async with self._uow_factory() as uow:
                row = await uow.equipments.get(equipment_id)
        if row is None:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        return EquipmentDTO.model_validate(row)

    async def create(self, payload: EquipmentCreateRequest) -> EquipmentDTO:
        if not payload.name or payload.quantity is None:
            raise ValidationError(MISSING_FIELDS_MESSAGE)
        required_quantity = payload.required_quantity or 0
        _check_counts(payload.quantity, required_quantity)

        with _store_call("Failed to create product"):
            async with self._uow_factory() as uow:
                row = await uow.equipments.create(
                    name=payload.name,
                    description=payload.description,
                    quantity=payload.quantity,
                    required_quantity=required_quantity,
                )
                await uow.commit()
        logger.info("equipment_created", equipment_id=row.id, quantity=row.quantity)
        return EquipmentDTO.model_validate(row)

    async def update(self, equipment_id: str, payload: EquipmentUpdateRequest) -> EquipmentDTO:
        _check_id(equipment_id)
        changes = payload.changes()
        if "name" in changes and not changes["name"]:
            raise ValidationError(EMPTY_NAME_MESSAGE)
        _check_counts(changes.get("quantity"), changes.get("required_quantity"))

        try:
            with _store_call("Failed to update product", equipment_id=equipment_id):
                async with self._uow_factory() as uow:
                    row = await uow.equipments.update(equipment_id, changes)
                    await uow.commit()
        except NotFoundError:
            raise NotFoundError(NOT_FOUND_MESSAGE) from None
        logger.info("equipment_updated", equipment_id=equipment_id, fields=sorted(changes))
        return EquipmentDTO.model_validate(row)

    async def delete(self, equipment_id: str) -> None:
        _check_id(equipment_id)
        try:
            with _store_call("Failed to delete product", equipment_id=equipment_id):
                async with self._uow_factory() as uow:
                    await uow.equipments.delete(equipment_id)
                    await uow.commit()
        except NotFoundError:
            raise NotFoundError(NOT_FOUND_MESSAGE) from None
        logger.info("equipment_deleted", equipment_id=equipment_id)
