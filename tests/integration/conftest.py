"""Integration fixtures that boot the app against a real PostgreSQL database."""

from __future__ import annotations

import os
from collections.abc import AsyncIterator

import httpx
import pytest
import pytest_asyncio
from dotenv import load_dotenv
from fastapi import FastAPI

from equipment_inventory.core.config import Settings
from equipment_inventory.main import create_app
from equipment_inventory.models import Base

INTEGRATION_PASSWORD = "integration-secret"

load_dotenv(".env.test")


@pytest.fixture
def database_url() -> str:
    url = os.getenv("TEST_DATABASE_URL")
    if not url:
        pytest.skip("TEST_DATABASE_URL is required for integration tests")
    return url


@pytest_asyncio.fixture
async def integration_app(database_url: str) -> AsyncIterator[FastAPI]:
    app = create_app(
        Settings(database_url=database_url, admin_password=INTEGRATION_PASSWORD, app_env="test")
    )
    async with app.router.lifespan_context(app):
        engine = app.state.database.engine
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
        try:
            yield app
        finally:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def integration_client(integration_app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=integration_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
