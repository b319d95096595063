"""Python client for the equipment inventory API."""

from .api import ApiError, InventoryApiClient, UnauthorizedError
from .controller import EquipmentForm, InventoryController
from .notifications import Notification, Notifier
from .storage import CredentialStore

__all__ = [
    "ApiError",
    "UnauthorizedError",
    "InventoryApiClient",
    "InventoryController",
    "EquipmentForm",
    "Notifier",
    "Notification",
    "CredentialStore",
]
