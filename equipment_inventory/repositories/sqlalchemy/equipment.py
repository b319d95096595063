"""SQLAlchemy implementation of the equipment repository."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from equipment_inventory.core.exceptions import NotFoundError
from equipment_inventory.models import Equipment
from equipment_inventory.repositories.interfaces import (
    UPDATABLE_FIELDS,
    EquipmentRepository,
    EquipmentRow,
)
from equipment_inventory.repositories.sqlalchemy.errors import store_errors

_COLUMNS = (
    Equipment.id,
    Equipment.name,
    Equipment.description,
    Equipment.quantity,
    Equipment.required_quantity,
    Equipment.created_at,
    Equipment.updated_at,
)


def _to_row(row: Any) -> EquipmentRow:
    return EquipmentRow(
        id=row.id,
        name=row.name,
        description=row.description,
        quantity=row.quantity,
        required_quantity=row.required_quantity,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlAlchemyEquipmentRepository(EquipmentRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_all(self) -> list[EquipmentRow]:
        # no ORDER BY: callers get the store's natural order
        with store_errors():
            rows = await self._session.execute(select(*_COLUMNS))
            return [_to_row(r) for r in rows.all()]

    async def get(self, equipment_id: str) -> EquipmentRow | None:
        with store_errors():
            rows = await self._session.execute(select(*_COLUMNS).where(Equipment.id == equipment_id))
            row = rows.first()
        return _to_row(row) if row is not None else None

    async def create(
        self,
        *,
        name: str,
        description: str | None,
        quantity: int,
        required_quantity: int,
    ) -> EquipmentRow:
        stmt = (
            insert(Equipment)
            .values(
                name=name,
                description=description,
                quantity=quantity,
                required_quantity=required_quantity,
            )
            .returning(*_COLUMNS)
        )
        with store_errors():
            rows = await self._session.execute(stmt)
            return _to_row(rows.one())

    async def update(self, equipment_id: str, changes: Mapping[str, Any]) -> EquipmentRow:
        values = {k: v for k, v in changes.items() if k in UPDATABLE_FIELDS}
        if not values:
            current = await self.get(equipment_id)
            if current is None:
                raise NotFoundError("equipment not found")
            return current

        # single statement: a concurrent delete surfaces as "no row returned"
        stmt = (
            update(Equipment)
            .where(Equipment.id == equipment_id)
            .values(**values)
            .returning(*_COLUMNS)
            .execution_options(synchronize_session=False)
        )
        with store_errors():
            rows = await self._session.execute(stmt)
            row = rows.first()
        if row is None:
            raise NotFoundError("equipment not found")
        return _to_row(row)

    async def delete(self, equipment_id: str) -> None:
        stmt = (
            delete(Equipment)
            .where(Equipment.id == equipment_id)
            .returning(Equipment.id)
            .execution_options(synchronize_session=False)
        )
        with store_errors():
            rows = await self._session.execute(stmt)
            deleted = rows.scalar_one_or_none()
        if deleted is None:
            raise NotFoundError("equipment not found")
