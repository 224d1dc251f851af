"""One-time database initialization script.

Creates all tables defined in the ORM models.
Run via: python scripts/init_db.py
"""

import asyncio

from sqlalchemy.ext.asyncio import create_async_engine

from hiregenius.core.config import settings
from hiregenius.models.orm import Base


async def init() -> None:
    engine = create_async_engine(settings.database_url)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()
    print("Database tables created successfully.")


if __name__ == "__main__":
    asyncio.run(init())
