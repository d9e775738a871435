import asyncio
import logging
from sqlalchemy import text
from splitledger.core.config import settings
from splitledger.db.session import Base, engine

logger = logging.getLogger(__name__)


async def wait_for_db(retries: int = settings.DB_CONNECT_RETRIES, delay: float = 2):
    for i in range(retries):
        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            logger.info("Database connected")
            return
        except Exception as e:
            logger.warning("Database not ready | [ %s/%s ] %s -> retrying...", i + 1, retries, e)
            await asyncio.sleep(delay)

    raise RuntimeError("Database unreachable after retries")


async def create_tables():
    # models must be imported so their tables are registered on Base
    import splitledger.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
