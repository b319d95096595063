"""SQLAlchemy implementations of repository interfaces."""

from .equipment import SqlAlchemyEquipmentRepository
from .errors import store_errors

__all__ = [
    "SqlAlchemyEquipmentRepository",
    "store_errors",
]
