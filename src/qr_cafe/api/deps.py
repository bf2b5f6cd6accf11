from fastapi import Request

from ..config import Settings
from ..services.catalog import MenuCatalog
from ..services.lifecycle import OrderLifecycleManager


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_catalog(request: Request) -> MenuCatalog:
    return request.app.state.catalog


def get_order_manager(request: Request) -> OrderLifecycleManager:
    return request.app.state.order_manager
