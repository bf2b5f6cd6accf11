import pytest
from fastapi.testclient import TestClient

from qr_cafe.config import Settings
from qr_cafe.db.base import Base
from qr_cafe.db.session import create_engine, create_session_factory
from qr_cafe.main import create_app
from qr_cafe.services.catalog import MenuCatalog
from qr_cafe.services.lifecycle import OrderLifecycleManager
from qr_cafe.store import MemoryCafeStore, MemoryOrderStore, SqlCafeStore, SqlOrderStore

IN_MEMORY_SQLITE = "sqlite+aiosqlite://"


def make_settings(**overrides) -> Settings:
    values = {"STORE_BACKEND": "memory", "DATABASE_URL": IN_MEMORY_SQLITE, "LOG_LEVEL": "WARNING"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture()
async def session_factory():
    engine = create_engine(IN_MEMORY_SQLITE)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield create_session_factory(engine)
    await engine.dispose()


@pytest.fixture(params=["memory", "sql"])
def backend(request):
    return request.param


@pytest.fixture()
def cafe_store(backend, session_factory):
    if backend == "memory":
        return MemoryCafeStore()
    return SqlCafeStore(session_factory)


@pytest.fixture()
def order_store(backend, session_factory):
    if backend == "memory":
        return MemoryOrderStore()
    return SqlOrderStore(session_factory)


@pytest.fixture()
def catalog(cafe_store):
    return MenuCatalog(cafe_store)


@pytest.fixture()
def manager(order_store):
    return OrderLifecycleManager(order_store)


@pytest.fixture()
def strict_manager(order_store):
    return OrderLifecycleManager(order_store, strict_transitions=True)


@pytest.fixture()
def tea_line():
    return {"menu_item_id": "tea", "name": "Tea", "price": 50, "quantity": 3}


@pytest.fixture()
def client(backend):
    app = create_app(make_settings(STORE_BACKEND=backend))
    with TestClient(app) as client:
        yield client
