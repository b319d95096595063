"""Shared-secret gate for mutating endpoints.

The admin password is compared by equality against the ``X-Admin-Password``
header. It is a coarse admin/viewer switch, not an authentication scheme.
"""

from __future__ import annotations

import secrets

import structlog
from fastapi import Header, Request

from equipment_inventory.core.exceptions import AuthorizationError

ADMIN_PASSWORD_HEADER = "X-Admin-Password"


def is_admin_password(candidate: str | None, expected: str | None) -> bool:
    if not expected or not candidate:
        return False
    return secrets.compare_digest(candidate.encode("utf-8"), expected.encode("utf-8"))


async def require_admin(
    request: Request,
    x_admin_password: str | None = Header(default=None, alias=ADMIN_PASSWORD_HEADER),
) -> None:
    settings = request.app.state.settings
    if not is_admin_password(x_admin_password, settings.admin_password):
        structlog.get_logger(__name__).warning(
            "admin_gate_rejected",
            header_present=bool(x_admin_password),
            configured=bool(settings.admin_password),
        )
        raise AuthorizationError("Unauthorized")
