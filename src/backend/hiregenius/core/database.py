from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from hiregenius.core.config import settings

engine = create_async_engine(settings.database_url, pool_size=10, max_overflow=5)
async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db() -> AsyncSession:
    async with async_session() as session:
        yield session
