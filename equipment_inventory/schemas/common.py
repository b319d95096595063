# equipment_inventory/schemas/common.py
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    error: str = Field(description="Error message")

    model_config = {"json_schema_extra": {"examples": [{"error": "Product not found"}]}}


class OkResponse(BaseModel):
    ok: bool = Field(description="Always true")

    model_config = {"json_schema_extra": {"examples": [{"ok": True}]}}
