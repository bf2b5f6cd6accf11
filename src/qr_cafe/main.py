import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from .api import health
from .api.errors import register_error_handlers
from .api.routes.cafes import router as cafes_router
from .api.routes.menu import router as menu_router
from .api.routes.orders import router as orders_router
from .api.routes.qr import router as qr_router
from .config import Settings, settings as default_settings
from .log import configure_logging
from .services.catalog import MenuCatalog
from .services.lifecycle import OrderLifecycleManager
from .store import build_stores

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        stores = await build_stores(settings)
        app.state.stores = stores
        app.state.catalog = MenuCatalog(stores.cafes)
        app.state.order_manager = OrderLifecycleManager(
            stores.orders, strict_transitions=settings.STRICT_STATUS_TRANSITIONS
        )
        logger.info("Application started (store: %s)", stores.backend)
        yield
        await stores.close()
        logger.info("Application stopped")

    app = FastAPI(title="QR Cafe", lifespan=lifespan)
    app.state.settings = settings

    # Подключаем роуты
    app.include_router(health.router)
    app.include_router(cafes_router)
    app.include_router(menu_router)
    app.include_router(orders_router)
    app.include_router(qr_router)

    register_error_handlers(app)
    return app


app = create_app()
