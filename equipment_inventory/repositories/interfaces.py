"""Repository abstractions for the service layer."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol

UPDATABLE_FIELDS = frozenset({"name", "description", "quantity", "required_quantity"})


@dataclass
class EquipmentRow:
    id: str
    name: str
    description: str | None
    quantity: int
    required_quantity: int
    created_at: datetime
    updated_at: datetime


class EquipmentRepository(Protocol):
    """CRUD boundary for equipment rows keyed by their opaque id.

    Failures are reported as domain errors: ``NotFoundError`` when the id has
    no row, ``ConflictError`` for constraint violations and
    ``InfrastructureError`` for anything else the store raises.
    """

    async def list_all(self) -> list[EquipmentRow]: ...

    async def get(self, equipment_id: str) -> EquipmentRow | None: ...

    async def create(
        self,
        *,
        name: str,
        description: str | None,
        quantity: int,
        required_quantity: int,
    ) -> EquipmentRow: ...

    async def update(self, equipment_id: str, changes: Mapping[str, Any]) -> EquipmentRow: ...

    async def delete(self, equipment_id: str) -> None: ...
