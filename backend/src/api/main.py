"""FastAPI application entry point."""
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from api.routers import admin_users, health, roles, todos, users
from core.cache import CacheError
from core.config import get_settings
from core.logging import configure_logging
from core.redis import RedisCache
from db.session import create_engine, create_session_factory
from db.store import Store
from services.container import build_container
from services.exceptions import (
    AlreadyExistsError,
    CacheCorruptedError,
    InvalidActionError,
    InvalidCredentialsError,
    NotFoundError,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan - startup and shutdown."""
    app_settings = get_settings()
    configure_logging(app_settings.log_level)

    # Startup: database engine and store
    engine = create_engine(app_settings)
    store = Store(create_session_factory(engine))

    # Startup: Redis cache. An unreachable Redis is not fatal: reads degrade to misses
    cache = RedisCache.from_url(app_settings.redis_url, app_settings.redis_pool_size)
    if await cache.ping():
        logger.info("Redis connected")
    else:
        logger.warning("Redis unreachable at startup; cached reads will fall back to the database")

    app.state.services = build_container(app_settings, store, cache)
    logger.info("Application started env=%s", app_settings.env)

    yield

    # Shutdown: release Redis and database pools
    await cache.close()
    await engine.dispose()
    logger.info("Application stopped")


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request and add security headers to response."""
        response = await call_next(request)
        response.headers["Strict-Transport-Security"] = (
            "max-age=31536000; includeSubDomains"
        )
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        return response


app_settings = get_settings()

app = FastAPI(
    title=app_settings.app_name,
    description="A todo list service with user accounts, roles and a read-through cache.",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(NotFoundError)
async def not_found_handler(_request: Request, exc: NotFoundError) -> JSONResponse:
    """Map missing (or foreign) entities to 404."""
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(AlreadyExistsError)
async def already_exists_handler(_request: Request, exc: AlreadyExistsError) -> JSONResponse:
    """Map uniqueness violations to 422, like request validation failures."""
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(InvalidCredentialsError)
async def invalid_credentials_handler(
    _request: Request, exc: InvalidCredentialsError,
) -> JSONResponse:
    """Map failed logins to 401 with one message for every cause."""
    return JSONResponse(status_code=401, content={"detail": str(exc)})


@app.exception_handler(InvalidActionError)
async def invalid_action_handler(_request: Request, exc: InvalidActionError) -> JSONResponse:
    """Map unknown role change actions to 400."""
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(CacheError)
@app.exception_handler(CacheCorruptedError)
async def cache_failure_handler(request: Request, exc: Exception) -> JSONResponse:
    """Cache failures are internal: log them and return an opaque 500."""
    logger.error(
        "Cache failure on %s %s: %s", request.method, request.url.path, exc, exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# Security headers middleware (runs after CORS, adds headers to responses)
app.add_middleware(SecurityHeadersMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(users.router)
app.include_router(admin_users.router)
app.include_router(roles.router)
app.include_router(todos.router)
