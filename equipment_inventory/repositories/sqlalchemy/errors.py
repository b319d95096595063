"""Translate SQLAlchemy failures into domain error kinds."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from equipment_inventory.core.exceptions import ConflictError, InfrastructureError


@contextmanager
def store_errors() -> Iterator[None]:
    try:
        yield
    except IntegrityError as exc:
        raise ConflictError("constraint violation") from exc
    except SQLAlchemyError as exc:
        raise InfrastructureError("database error") from exc
    except OSError as exc:
        # asyncpg connect failures are not wrapped by SQLAlchemy
        raise InfrastructureError("database unavailable") from exc
