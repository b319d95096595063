"""Transient user notifications (pending -> success/error)."""

from __future__ import annotations

import itertools
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Literal, TypeVar

from equipment_inventory.client.api import ApiError

T = TypeVar("T")

Kind = Literal["loading", "success", "error"]


@dataclass
class Notification:
    id: int
    kind: Kind
    message: str


class Notifier:
    def __init__(self, on_change: Callable[[Notification], None] | None = None) -> None:
        self.notifications: list[Notification] = []
        self._ids = itertools.count(1)
        self._on_change = on_change

    def _emit(self, kind: Kind, message: str, replace: Notification | None) -> Notification:
        if replace is not None:
            replace.kind = kind
            replace.message = message
            note = replace
        else:
            note = Notification(id=next(self._ids), kind=kind, message=message)
            self.notifications.append(note)
        if self._on_change is not None:
            self._on_change(note)
        return note

    def loading(self, message: str) -> Notification:
        return self._emit("loading", message, None)

    def success(self, message: str, *, replace: Notification | None = None) -> Notification:
        return self._emit("success", message, replace)

    def error(self, message: str, *, replace: Notification | None = None) -> Notification:
        return self._emit("error", message, replace)

    @property
    def latest(self) -> Notification | None:
        return self.notifications[-1] if self.notifications else None

    def clear(self) -> None:
        self.notifications.clear()

    async def track(
        self,
        awaitable: Awaitable[T],
        *,
        loading: str,
        success: str | Callable[[T], str],
        error: str | Callable[[ApiError], str],
    ) -> tuple[bool, T | None]:
        """Show ``loading`` until ``awaitable`` settles, then turn it into success or error.

        Only ``ApiError`` is treated as a user-facing failure; anything else propagates.
        """
        note = self.loading(loading)
        try:
            result = await awaitable
        except ApiError as exc:
            self.error(error(exc) if callable(error) else error, replace=note)
            return False, None
        self.success(success(result) if callable(success) else success, replace=note)
        return True, result
