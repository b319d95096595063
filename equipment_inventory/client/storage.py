"""Client-side persistence of the admin password."""

from __future__ import annotations

import json
import os
from pathlib import Path

import structlog

DEFAULT_STATE_PATH = Path.home() / ".equipment-inventory" / "client.json"
STATE_PATH_ENV = "INVENTORY_CLIENT_STATE"

logger = structlog.get_logger(__name__)


class CredentialStore:
    """JSON file holding ``{"adminPassword": "..."}``; survives restarts, never expires."""

    def __init__(self, path: str | os.PathLike | None = None) -> None:
        self.path = Path(path or os.getenv(STATE_PATH_ENV) or DEFAULT_STATE_PATH)

    def _read(self) -> dict:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError):
            logger.warning("client_state_unreadable", path=str(self.path))
            return {}
        return data if isinstance(data, dict) else {}

    def load_password(self) -> str | None:
        password = self._read().get("adminPassword")
        return password if isinstance(password, str) and password else None

    def save_password(self, password: str) -> None:
        data = self._read()
        data["adminPassword"] = password
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data), encoding="utf-8")

    def clear(self) -> None:
        data = self._read()
        if "adminPassword" not in data:
            return
        del data["adminPassword"]
        if data:
            self.path.write_text(json.dumps(data), encoding="utf-8")
        else:
            self.path.unlink(missing_ok=True)
