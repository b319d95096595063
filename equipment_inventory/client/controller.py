"""Client-side state for the equipment list.

Holds the fetched collection, search query, admin/viewer mode and form
state, and drives the API client. Mutations are refused locally in viewer
mode (the login prompt opens instead); quantity nudges are applied
optimistically and rolled back by re-fetching when the server rejects them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import structlog

from equipment_inventory.client.api import ApiError, InventoryApiClient, UnauthorizedError
from equipment_inventory.client.notifications import Notifier
from equipment_inventory.client.storage import CredentialStore
from equipment_inventory.schemas.equipment import EquipmentDTO

INCORRECT_PASSWORD_MESSAGE = "Incorrect admin password"

logger = structlog.get_logger(__name__)


@dataclass
class EquipmentForm:
    name: str = ""
    description: str = ""
    quantity: int | str = ""
    required_quantity: int | str = ""

    def payload(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "name": self.name,
            "description": self.description or None,
            "quantity": self.quantity,
        }
        if str(self.required_quantity).strip():
            body["requiredQuantity"] = self.required_quantity
        return body


def _failure(generic: str):
    def _message(exc: ApiError) -> str:
        if isinstance(exc, UnauthorizedError):
            return INCORRECT_PASSWORD_MESSAGE
        return generic

    return _message


class InventoryController:
    def __init__(
        self,
        api: InventoryApiClient,
        store: CredentialStore,
        notifier: Notifier | None = None,
    ) -> None:
        self._api = api
        self._store = store
        self.notifier = notifier or Notifier()

        self.items: list[EquipmentDTO] = []
        self.search_query = ""
        self.loading = False
        self.fetch_error: str | None = None
        self.login_prompt_open = False
        self.new_equipment = EquipmentForm()
        self.editing: EquipmentDTO | None = None
        self._mounted = False

        password = store.load_password()
        self._api.admin_password = password
        self.is_admin = password is not None

    # --- data ---

    async def mount(self) -> bool:
        """Fetch once on first use; later calls report whether the last fetch worked."""
        if self._mounted:
            return self.fetch_error is None
        self._mounted = True
        return await self.fetch_equipment()

    async def fetch_equipment(self) -> bool:
        self.loading = True
        try:
            self.items = await self._api.list_equipment()
        except ApiError as exc:
            self.fetch_error = exc.message
            logger.warning("equipment_fetch_failed", status=exc.status_code)
            self.notifier.error(f"Failed to load equipment: {exc.message}")
            return False
        finally:
            self.loading = False
        self.fetch_error = None
        return True

    @property
    def visible_items(self) -> list[EquipmentDTO]:
        query = self.search_query.lower()
        return [item for item in self.items if query in item.name.lower()]

    @property
    def shortage_items(self) -> list[EquipmentDTO]:
        return [item for item in self.visible_items if item.is_short]

    def find(self, equipment_id: str) -> EquipmentDTO | None:
        return next((item for item in self.items if item.id == equipment_id), None)

    def _replace(self, updated: EquipmentDTO) -> None:
        self.items = [updated if item.id == updated.id else item for item in self.items]

    # --- admin gate ---

    def login(self, password: str) -> bool:
        if not password:
            self.notifier.error("Enter the admin password")
            return False
        self._store.save_password(password)
        self._api.admin_password = password
        self.is_admin = True
        self.login_prompt_open = False
        return True

    def logout(self) -> None:
        self._store.clear()
        self._api.admin_password = None
        self.is_admin = False
        self.editing = None

    def _require_admin(self) -> bool:
        if self.is_admin:
            return True
        self.login_prompt_open = True
        return False

    # --- mutations ---

    async def add_equipment(self) -> bool:
        if not self._require_admin():
            return False
        ok, _ = await self.notifier.track(
            self._api.create_equipment(self.new_equipment.payload()),
            loading="Adding equipment...",
            success="Equipment added!",
            error=_failure("Failed to add equipment"),
        )
        if ok:
            self.new_equipment = EquipmentForm()
            await self.fetch_equipment()
        return ok

    def start_editing(self, equipment_id: str) -> bool:
        if not self._require_admin():
            return False
        item = self.find(equipment_id)
        if item is None:
            return False
        self.editing = item.model_copy()
        return True

    def edit(self, **changes: Any) -> None:
        if self.editing is not None:
            self.editing = self.editing.model_copy(update=changes)

    def cancel_editing(self) -> None:
        self.editing = None

    async def update_equipment(self) -> bool:
        if not self._require_admin() or self.editing is None:
            return False
        editing = self.editing
        ok, _ = await self.notifier.track(
            self._api.update_equipment(
                editing.id,
                {
                    "name": editing.name,
                    "description": editing.description,
                    "quantity": editing.quantity,
                    "requiredQuantity": editing.required_quantity,
                },
            ),
            loading="Updating equipment...",
            success="Equipment updated!",
            error=_failure("Failed to update equipment"),
        )
        if ok:
            self.editing = None
            await self.fetch_equipment()
        return ok

    async def delete_equipment(self, equipment_id: str) -> bool:
        if not self._require_admin():
            return False
        ok, _ = await self.notifier.track(
            self._api.delete_equipment(equipment_id),
            loading="Deleting equipment...",
            success="Equipment deleted!",
            error=_failure("Failed to delete equipment"),
        )
        if ok:
            if self.editing is not None and self.editing.id == equipment_id:
                self.editing = None
            await self.fetch_equipment()
        return ok

    async def adjust_quantity(self, equipment_id: str, delta: int) -> bool:
        """Apply ``quantity + delta`` (floored at 0) locally, then confirm with the server."""
        if not self._require_admin():
            return False
        item = self.find(equipment_id)
        if item is None:
            return False
        new_quantity = max(0, item.quantity + delta)
        if new_quantity == item.quantity:
            return False

        self._replace(item.model_copy(update={"quantity": new_quantity}))
        try:
            updated = await self._api.update_equipment(equipment_id, {"quantity": new_quantity})
        except ApiError as exc:
            logger.warning(
                "quantity_update_rejected", equipment_id=equipment_id, status=exc.status_code
            )
            await self.fetch_equipment()
            self.notifier.error(_failure("Failed to update quantity")(exc))
            return False
        self._replace(updated)
        return True
