"""Async HTTP client for the /api/products endpoints."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from equipment_inventory.core.security import ADMIN_PASSWORD_HEADER
from equipment_inventory.schemas.equipment import EquipmentDTO

PRODUCTS_PATH = "/api/products"


class ApiError(Exception):
    """A failed API call. ``status_code`` is 0 when no response was received."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class UnauthorizedError(ApiError):
    """The server rejected the admin password (HTTP 401)."""


def _error_from(response: httpx.Response) -> ApiError:
    try:
        message = str(response.json().get("error") or response.reason_phrase)
    except (ValueError, AttributeError):
        message = response.reason_phrase or f"HTTP {response.status_code}"
    if response.status_code == 401:
        return UnauthorizedError(401, message)
    return ApiError(response.status_code, message)


class InventoryApiClient:
    def __init__(
        self,
        base_url: str,
        *,
        admin_password: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.admin_password = admin_password
        self._client = httpx.AsyncClient(base_url=base_url, transport=transport)

    async def __aenter__(self) -> InventoryApiClient:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Mapping[str, Any] | None = None,
        admin: bool = False,
    ) -> httpx.Response:
        headers = {}
        if admin and self.admin_password:
            headers[ADMIN_PASSWORD_HEADER] = self.admin_password
        try:
            response = await self._client.request(method, path, json=json, headers=headers)
        except httpx.HTTPError as exc:
            raise ApiError(0, str(exc) or exc.__class__.__name__) from exc
        if response.is_error:
            raise _error_from(response)
        return response

    async def list_equipment(self) -> list[EquipmentDTO]:
        response = await self._request("GET", PRODUCTS_PATH)
        return [EquipmentDTO.model_validate(item) for item in response.json()]

    async def get_equipment(self, equipment_id: str) -> EquipmentDTO:
        response = await self._request("GET", f"{PRODUCTS_PATH}/{equipment_id}")
        return EquipmentDTO.model_validate(response.json())

    async def create_equipment(self, fields: Mapping[str, Any]) -> EquipmentDTO:
        response = await self._request("POST", PRODUCTS_PATH, json=fields, admin=True)
        return EquipmentDTO.model_validate(response.json())

    async def update_equipment(self, equipment_id: str, fields: Mapping[str, Any]) -> EquipmentDTO:
        response = await self._request(
            "PUT", f"{PRODUCTS_PATH}/{equipment_id}", json=fields, admin=True
        )
        return EquipmentDTO.model_validate(response.json())

    async def delete_equipment(self, equipment_id: str) -> None:
        await self._request("DELETE", f"{PRODUCTS_PATH}/{equipment_id}", admin=True)
