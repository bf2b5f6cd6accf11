import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..exceptions import QrCafeError, StoreFailure

logger = logging.getLogger(__name__)


async def qr_cafe_error_handler(request: Request, exc: QrCafeError) -> JSONResponse:
    if isinstance(exc, StoreFailure):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # тело запроса не прошло схему — для клиента это та же 400
    details = [
        {"loc": [str(part) for part in error.get("loc", ())], "msg": error.get("msg", "")}
        for error in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"error": "Invalid request", "details": details})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(QrCafeError, qr_cafe_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
