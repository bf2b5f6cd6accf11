from datetime import datetime

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health", summary="Health check")
async def health_check(request: Request):
    """
    Простейший health-check эндпоинт.
    store — какое хранилище сейчас используется (sql / memory).
    """
    stores = request.app.state.stores
    return {
        "status": "ok",
        "timestamp": datetime.now(),
        "store": stores.backend,
        "fallback": stores.fallback,
    }
