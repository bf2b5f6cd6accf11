import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from ..config import Settings
from ..db.base import Base
from ..db.session import create_engine, create_session_factory
from ..exceptions import StoreFailure
from .base import CafeStore, OrderStore
from .memory import MemoryCafeStore, MemoryOrderStore
from .sample import seed_sample_data
from .sql import SqlCafeStore, SqlOrderStore

logger = logging.getLogger(__name__)


@dataclass
class Stores:
    cafes: CafeStore
    orders: OrderStore
    backend: str
    engine: Optional[AsyncEngine] = None
    fallback: bool = False

    async def close(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()


def memory_stores(fallback: bool = False) -> Stores:
    return Stores(cafes=MemoryCafeStore(), orders=MemoryOrderStore(), backend="memory", fallback=fallback)


async def build_stores(settings: Settings) -> Stores:
    """
    Выбирает реализацию хранилища по STORE_BACKEND.
    Если SQL недоступен и разрешён STORE_FALLBACK_TO_MEMORY — работаем в памяти
    с демо-данными, иначе StoreFailure.
    """
    if settings.STORE_BACKEND == "memory":
        stores = memory_stores()
    else:
        engine = create_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
        try:
            async with engine.begin() as conn:
                if settings.CREATE_TABLES:
                    await conn.run_sync(Base.metadata.create_all)
                else:
                    await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as exc:
            await engine.dispose()
            if not settings.STORE_FALLBACK_TO_MEMORY:
                raise StoreFailure("Database is unreachable") from exc
            logger.warning("Database is unreachable (%s), falling back to in-memory store", exc)
            stores = memory_stores(fallback=True)
            await seed_sample_data(stores.cafes)
            return stores

        session_factory = create_session_factory(engine)
        stores = Stores(
            cafes=SqlCafeStore(session_factory),
            orders=SqlOrderStore(session_factory),
            backend="sql",
            engine=engine,
        )

    if settings.SEED_SAMPLE_DATA and await seed_sample_data(stores.cafes):
        logger.info("Sample cafe seeded")
    return stores


__all__ = [
    "CafeStore",
    "OrderStore",
    "Stores",
    "MemoryCafeStore",
    "MemoryOrderStore",
    "SqlCafeStore",
    "SqlOrderStore",
    "build_stores",
    "memory_stores",
    "seed_sample_data",
]
