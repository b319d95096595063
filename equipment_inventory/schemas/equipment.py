"""Request and response models for equipment resources.

JSON uses camelCase (``requiredQuantity``, ``createdAt``); request bodies
also accept the snake_case field names.
"""

from __future__ import annotations

import math
import re
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


def coerce_int(value: Any) -> int | None:
    """Coerce ``value`` the way the web client's ``parseInt`` does.

    Blank strings count as absent. Booleans and values without a leading
    integer are rejected.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError("expected an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            raise ValueError("expected an integer")
        return int(value)
    if isinstance(value, str):
        if not value.strip():
            return None
        match = _LEADING_INT.match(value)
        if match is None:
            raise ValueError("expected an integer")
        return int(match.group(1))
    raise ValueError("expected an integer")


_REQUEST_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EquipmentCreateRequest(BaseModel):
    # Presence is checked by the service so that a missing field is a 400
    # with a fixed message rather than a schema error.
    name: str | None = Field(default=None, description="Equipment name (required)")
    description: str | None = Field(default=None, description="Free text (optional)")
    quantity: int | None = Field(default=None, description="Units on hand (required)")
    required_quantity: int | None = Field(default=None, description="Stocking target (default 0)")

    model_config = _REQUEST_CONFIG

    @field_validator("quantity", "required_quantity", mode="before")
    @classmethod
    def coerce_counts(cls, value: Any) -> int | None:
        return coerce_int(value)


class EquipmentUpdateRequest(BaseModel):
    name: str | None = None
    description: str | None = None
    quantity: int | None = None
    required_quantity: int | None = None

    model_config = _REQUEST_CONFIG

    @field_validator("quantity", "required_quantity", mode="before")
    @classmethod
    def coerce_counts(cls, value: Any) -> int | None:
        return coerce_int(value)

    def changes(self) -> dict[str, Any]:
        """Fields the caller actually sent.

        ``null`` means "leave unchanged" for the non-nullable columns and
        "clear" for ``description``.
        """
        sent = self.model_dump(exclude_unset=True)
        return {k: v for k, v in sent.items() if v is not None or k == "description"}


class EquipmentDTO(BaseModel):
    id: str = Field(description="Opaque identifier")
    name: str
    description: str | None = None
    quantity: int
    required_quantity: int = 0
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "0b8c7c1e-4a55-4a43-9c1f-2f6a3f1f7d10",
                "name": "Basketball",
                "description": "Size 7",
                "quantity": 5,
                "requiredQuantity": 10,
                "createdAt": "2025-01-01T00:00:00Z",
                "updatedAt": "2025-01-01T00:00:00Z",
            }
        },
    )

    @property
    def is_short(self) -> bool:
        return self.quantity < self.required_quantity
