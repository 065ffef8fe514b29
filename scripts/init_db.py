"""Create the directory tables on an empty database (local development)."""

import asyncio

from sqlalchemy.ext.asyncio import create_async_engine

from churchdb.config import get_settings
from churchdb.db.base import Base
import churchdb.models  # noqa: F401


async def init():
    engine = create_async_engine(get_settings().store_url())
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(init())
    print("Database schema created.")
