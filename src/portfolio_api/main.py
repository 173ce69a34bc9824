from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from asgi_correlation_id import CorrelationIdMiddleware, correlation_id
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.middleware.base import RequestResponseEndpoint

from src.portfolio_api.api.routes.router import api_router
from src.portfolio_api.core.config import Settings, get_settings
from src.portfolio_api.core.db import (
    create_engine_from_settings,
    create_session_factory,
    dispose_engine,
)
from src.portfolio_api.core.exceptions import setup_exception_handlers
from src.portfolio_api.core.health import setup_health_endpoint, setup_metrics
from src.portfolio_api.core.logging import (
    bind_request_context,
    clear_request_context,
    get_logger,
    setup_logging,
)
from src.portfolio_api.core.rate_limit import limiter
from src.portfolio_api.core.security import SecurityHeadersMiddleware
from src.portfolio_api.core.storage import LocalImageStorage

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown."""
    settings: Settings = app.state.settings
    logger.info(f"Starting {settings.app_name}", app_env=settings.app_env)

    yield

    logger.info("Closing connections...")
    await dispose_engine(app.state.engine)
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "auth", "description": "Admin login"},
    {"name": "contact", "description": "Public contact form"},
    {"name": "messages", "description": "Admin inbox for contact messages"},
    {"name": "projects", "description": "Portfolio projects"},
    {"name": "upload", "description": "Project image uploads"},
    {"name": "dashboard", "description": "Admin dashboard counters"},
    {"name": "health", "description": "Liveness and readiness"},
]


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.debug, settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description="Portfolio website backend: projects, contact messages and admin login",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
        docs_url="/docs" if settings.enable_openapi else None,
        redoc_url="/redoc" if settings.enable_openapi else None,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
    )

    # Shared resources, created once and reached from dependencies via app.state
    engine = create_engine_from_settings(settings)
    storage = LocalImageStorage(Path(settings.upload_dir), url_prefix=settings.upload_url_prefix)
    storage.ensure_root()
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.storage = storage

    setup_exception_handlers(app)

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]

    # Last added runs outermost: correlation id, then CORS, security headers, log context
    @app.middleware("http")
    async def logging_context_middleware(
        request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Bind request_id to log context for all requests."""
        clear_request_context()
        bind_request_context(correlation_id.get())
        try:
            return await call_next(request)
        finally:
            clear_request_context()

    csp = None if settings.is_development else settings.csp_production
    app.add_middleware(SecurityHeadersMiddleware, content_security_policy=csp)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
    )

    app.add_middleware(CorrelationIdMiddleware)

    app.include_router(api_router)
    app.mount(
        storage.url_prefix,
        StaticFiles(directory=storage.root, check_dir=False),
        name="uploads",
    )

    setup_health_endpoint(app)
    setup_metrics(app, settings)

    return app


app = create_app()
