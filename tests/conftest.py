# tests/conftest.py
import os
from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

# Boot the app in testing mode before it is imported (rate limiting off, no Sentry).
os.environ["TESTING"] = "1"
os.environ.setdefault("APP_ENV", "test")
os.environ["SENTRY_DSN"] = ""

from equipment_inventory.api.deps import get_equipment_service  # noqa: E402
from equipment_inventory.client.api import InventoryApiClient  # noqa: E402
from equipment_inventory.core.config import Settings  # noqa: E402
from equipment_inventory.main import create_app  # noqa: E402
from equipment_inventory.services.equipments import EquipmentService  # noqa: E402
from tests.fakes import FakeUnitOfWork, InMemoryEquipmentRepository  # noqa: E402

ADMIN_PASSWORD = "test-secret"
ADMIN_HEADERS = {"X-Admin-Password": ADMIN_PASSWORD}
BASE_URL = "http://test"


@pytest.fixture
def equipment_repo() -> InMemoryEquipmentRepository:
    return InMemoryEquipmentRepository()


@pytest.fixture
def settings() -> Settings:
    return Settings(admin_password=ADMIN_PASSWORD, app_env="test", sentry_dsn=None)


@pytest.fixture
def app(settings: Settings, equipment_repo: InMemoryEquipmentRepository) -> FastAPI:
    application = create_app(settings)
    application.dependency_overrides[get_equipment_service] = lambda: EquipmentService(
        lambda: FakeUnitOfWork(equipment_repo)
    )
    return application


@pytest_asyncio.fixture
async def app_client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url=BASE_URL) as ac:
        yield ac


@pytest_asyncio.fixture
async def admin_client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url=BASE_URL, headers=ADMIN_HEADERS
    ) as ac:
        yield ac


@pytest_asyncio.fixture
async def api_client(app: FastAPI) -> AsyncIterator[InventoryApiClient]:
    async with InventoryApiClient(BASE_URL, transport=ASGITransport(app=app)) as client:
        yield client
