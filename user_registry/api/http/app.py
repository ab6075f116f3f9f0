"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from loguru import logger
from starlette.responses import JSONResponse, PlainTextResponse

from user_registry import __version__
from user_registry.api.http.app_data import ApplicationDependencies
from user_registry.api.http.routers.health import router as health_router
from user_registry.api.http.routers.users import router as users_router
from user_registry.api.utils.app_startup import configure_logging
from user_registry.core.exceptions import INVALID_DATE_FORMAT_MESSAGE
from user_registry.core.services import (
    DbManageService,
    DbSessionService,
    UserValidator,
)
from user_registry.runtime.context import get_config

configure_logging()


# --- Lifecycle hooks ---
async def startup() -> None:
    config = get_config()
    logger.info("Starting up application in {} environment", config.app.environment)
    logger.info(
        "Minimum age for registration: {}",
        config.users.min_age_for_registration,
    )

    database_service = DbSessionService()
    DbManageService(database_service.engine).create_all()
    app.state.app_dependencies = ApplicationDependencies(
        database_service=database_service,
        user_validator=UserValidator(config.users.min_age_for_registration),
    )


async def shutdown() -> None:
    logger.info("Shutting down application")
    app_dependencies: ApplicationDependencies | None = getattr(
        app.state, "app_dependencies", None
    )
    if app_dependencies is not None:
        app_dependencies.database_service.dispose()


@asynccontextmanager
async def lifespan(app: FastAPI):
    await startup()
    try:
        yield
    finally:
        await shutdown()


app = FastAPI(
    title="User Registry",
    version=__version__,
    lifespan=lifespan,
    docs_url=None if get_config().app.environment == "production" else "/docs",
    redoc_url=None if get_config().app.environment == "production" else "/redoc",
)

# expose startup for tests
__all__ = ["app", "startup", "shutdown"]


# --- Request logging middleware ---
@app.middleware("http")
async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": request.client.host if request.client else "unknown",
    }

    start = time.perf_counter()

    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await call_next(request)

            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=response.status_code,
                duration_ms=round(duration_ms, 1),
            ).info("request.end")

            response.headers.setdefault("X-Request-ID", request_id)
            return response

        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return JSONResponse(
                status_code=500,
                content={"detail": "Internal Server Error", "request_id": request_id},
                headers={"X-Request-ID": request_id},
            )


# --- Request decoding errors ---
@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> PlainTextResponse:
    """Unreadable bodies and query parameters get the date-format message."""
    logger.bind(errors=exc.errors()).warning("request.validation_error")
    return PlainTextResponse(INVALID_DATE_FORMAT_MESSAGE, status_code=400)


# --- Router registration ---
app.include_router(health_router)
app.include_router(users_router)


if __name__ == "__main__":
    import uvicorn

    config = get_config()
    uvicorn.run(
        app,
        host=config.app.host,
        port=config.app.port,
        access_log=False,  # Access logging happens in the middleware
    )
