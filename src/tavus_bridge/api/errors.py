"""
JSON error responses shared by both FastAPI apps.

Tavus (and any other webhook caller) gets small, non-leaking bodies:
- unknown path or wrong method -> 404 {"error": "Not found"}
- anything unhandled           -> 500 {"error": "Internal server error"}
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.tavus_bridge.logging.logger import setup_logger

logger = setup_logger(__name__)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # 405 is folded into 404: callers only learn the route does not exist for them.
    if exc.status_code in (404, 405):
        logger.info("Route not found | method=%s | path=%s", request.method, request.url.path)
        return error_response(404, "Not found")
    return error_response(exc.status_code, str(exc.detail))


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error | method=%s | path=%s",
        request.method,
        request.url.path,
        exc_info=exc,
    )
    return error_response(500, "Internal server error")


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
