"""FastAPI application factory for the userhub service."""
from __future__ import annotations

import time
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

from userhub.core.config import Settings, get_settings
from userhub.db.session import build_engine
from userhub.repositories.sql_repository import UserStore
from userhub.routers import health as health_router
from userhub.routers import users as users_router
from userhub.services.errors import UserServiceError
from userhub.services.user_service import UserService


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Log one line per request (method, path, status, duration)."""

    async def dispatch(self, request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
        logger.bind(
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration_ms=elapsed_ms,
        ).info("{} {} {}", request.method, request.url.path, response.status_code)
        return response


async def handle_service_error(request: Request, exc: UserServiceError):
    status_code = users_router.error_status(exc)
    log = logger.bind(status=status_code, error=type(exc).__name__, field=exc.field, path=request.url.path)
    if status_code >= 500:
        log.opt(exception=exc).error(exc.message)
        return users_router.failure("Internal Server Error", status_code)
    log.warning(exc.message)
    return users_router.failure(exc.message, status_code)


async def handle_validation_error(request: Request, exc: RequestValidationError):
    logger.bind(status=400, path=request.url.path).warning("Malformed request body")
    return users_router.failure("Request body must be a JSON object", 400)


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.bind(status=500, path=request.url.path).opt(exception=exc).error("Unhandled error")
    return users_router.failure("Internal Server Error", 500)


def create_app(settings: Optional[Settings] = None, store: Optional[UserStore] = None) -> FastAPI:
    """Build the app; creates the schema and seeds managers on the given (or default) store."""
    settings = settings or get_settings()
    store = store or UserStore(build_engine(settings.database_url))
    store.initialize()

    app = FastAPI(title="userhub")
    app.state.settings = settings
    app.state.user_store = store
    app.state.user_service = UserService(store)

    app.add_middleware(AccessLogMiddleware)
    app.add_exception_handler(UserServiceError, handle_service_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    app.include_router(health_router.router)
    app.include_router(users_router.router)
    return app
