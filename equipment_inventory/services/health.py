from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from equipment_inventory.repositories.sqlalchemy import store_errors


class HealthService:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def ok(self) -> dict:
        """Round-trip ``SELECT 1``; raises InfrastructureError when the DB is unreachable."""
        with store_errors():
            async with self._session_factory() as session:
                await session.execute(text("SELECT 1"))
        return {"ok": True}
