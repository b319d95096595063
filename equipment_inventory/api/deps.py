"""API dependency helpers and service providers."""

from fastapi import Depends, Request

from equipment_inventory.db import Database
from equipment_inventory.infra.unit_of_work import SqlAlchemyUnitOfWork
from equipment_inventory.services.equipments import EquipmentService
from equipment_inventory.services.health import HealthService

__all__ = [
    "get_database",
    "get_equipment_service",
    "get_health_service",
]


def get_database(request: Request) -> Database:
    """The Database connected by the app lifespan."""
    return request.app.state.database


# --- Service providers for DI ---


def get_equipment_service(database: Database = Depends(get_database)) -> EquipmentService:
    return EquipmentService(lambda: SqlAlchemyUnitOfWork(database.session_factory))


def get_health_service(database: Database = Depends(get_database)) -> HealthService:
    return HealthService(database.session_factory)
