"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Request
from starlette.responses import JSONResponse

from user_registry.api.http.app_data import ApplicationDependencies
from user_registry.runtime.context import get_config

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """Liveness probe: 200 OK as long as the process is serving requests."""
    return {"status": "healthy", "service": "api"}


@router.get("/ready", response_model=None)
def readiness(request: Request) -> dict[str, Any] | JSONResponse:
    """Readiness probe: 200 when the database answers, 503 otherwise."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    config = get_config()

    db_healthy = app_deps.database_service.health_check()
    body = {
        "status": "ready" if db_healthy else "not_ready",
        "checks": {
            "database": {
                "status": "healthy" if db_healthy else "unhealthy",
                "type": "sqlite" if config.database.is_sqlite else "server",
            }
        },
    }
    if not db_healthy:
        return JSONResponse(status_code=503, content=body)
    return body
