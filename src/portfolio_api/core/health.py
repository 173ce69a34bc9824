"""Health endpoints and Prometheus metrics."""

import secrets
from datetime import UTC, datetime
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from fastapi.security import APIKeyHeader
from prometheus_fastapi_instrumentator import Instrumentator
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from src.portfolio_api.core.config import Settings
from src.portfolio_api.core.db import get_session
from src.portfolio_api.core.logging import get_logger

logger = get_logger(__name__)

SERVICE_NAME = "Portfolio API"
FEATURES = ["projects", "contact", "messages", "authentication"]


def _timestamp() -> str:
    # ISO 8601 with millisecond precision and a Z suffix
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def setup_health_endpoint(app: FastAPI) -> None:
    """Configure the liveness and readiness endpoints."""

    @app.get("/api/health", tags=["health"])
    async def health() -> dict[str, Any]:
        """Liveness: answers as long as the process serves requests."""
        return {
            "status": "ok",
            "timestamp": _timestamp(),
            "service": SERVICE_NAME,
            "features": FEATURES,
        }

    @app.get("/api/health/ready", tags=["health"])
    async def readiness(request: Request) -> JSONResponse:
        """Readiness: also checks that the database answers."""
        health_status: dict[str, Any] = {
            "status": "healthy",
            "database": "healthy",
            "timestamp": _timestamp(),
        }
        try:
            async with get_session(request.app.state.session_factory) as session:
                await session.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            logger.warning("Readiness check failed", error=str(e))
            health_status["database"] = f"unhealthy: {e!s}"
            health_status["status"] = "unhealthy"

        status_code = 200 if health_status["status"] == "healthy" else 503
        return JSONResponse(content=health_status, status_code=status_code)


def setup_metrics(app: FastAPI, settings: Settings) -> None:
    """Configure Prometheus metrics with optional API key protection."""
    instrumentator = Instrumentator().instrument(app)

    if settings.metrics_api_key:
        api_key_header = APIKeyHeader(name="X-Metrics-Key", auto_error=False)

        async def verify_metrics_key(
            api_key: str | None = Depends(api_key_header),
        ) -> None:
            if (
                api_key is None
                or settings.metrics_api_key is None
                or not secrets.compare_digest(api_key, settings.metrics_api_key)
            ):
                raise HTTPException(
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    detail="Invalid or missing metrics API key",
                )

        instrumentator.expose(app, endpoint="/metrics", dependencies=[Depends(verify_metrics_key)])
    else:
        instrumentator.expose(app, endpoint="/metrics")
