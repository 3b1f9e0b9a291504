# meetcal/main.py
"""
FastAPI application for meetcal.

``create_app`` builds the app; the lifespan owns the database engine and puts
the session factory on ``app.state`` for the request dependencies. Run with::

    uvicorn meetcal.main:app
"""

from contextlib import asynccontextmanager
import logging
import time
from typing import AsyncGenerator, Awaitable, Callable, Optional

from fastapi import APIRouter, FastAPI, Request, Response

from . import __version__
from .core.config import is_running_tests, settings
from .database import build_session_factory, create_db_engine
from .errors import register_error_handlers
from .monitoring.prometheus_metrics import prometheus_metrics
from .routes.v1 import calendar as calendar_v1, meets as meets_v1, users as users_v1

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


def _route_label(request: Request) -> str:
    # Use the route template, not the raw path, to keep metric label cardinality bounded
    route = request.scope.get("route")
    return getattr(route, "path", None) or "unmatched"


def create_app(database_url: Optional[str] = None) -> FastAPI:
    """
    Build the meetcal API.

    Args:
        database_url: Override for the configured database URL
    """

    @asynccontextmanager
    async def app_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Handle application startup/shutdown."""
        logger.info(f"meetcal API starting up (environment: {settings.environment})")
        if is_running_tests():
            logger.info("Running under pytest (test mode active)")

        engine = create_db_engine(database_url)
        app.state.engine = engine
        app.state.session_factory = build_session_factory(engine)
        try:
            yield
        finally:
            engine.dispose()
            logger.info("meetcal API shut down")

    app = FastAPI(
        title="meetcal API",
        description="Weekly availability calendars and group meetup scheduling",
        version=__version__,
        lifespan=app_lifespan,
    )

    @app.middleware("http")
    async def record_request_metrics(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        start_time = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            prometheus_metrics.record_http_request(
                method=request.method,
                endpoint=_route_label(request),
                duration=time.perf_counter() - start_time,
                status_code=status_code,
            )

    register_error_handlers(app)

    api_v1 = APIRouter(prefix="/api/v1")
    api_v1.include_router(users_v1.router, prefix="/users")
    api_v1.include_router(calendar_v1.router, prefix="/calendar")
    api_v1.include_router(meets_v1.router, prefix="/meets")
    app.include_router(api_v1)

    @app.get("/health", tags=["health"])
    async def health_check() -> dict[str, str]:
        """Liveness probe."""
        return {"status": "healthy", "service": "meetcal", "version": __version__}

    # Standard /metrics/prometheus path for Prometheus scraping
    @app.get("/metrics/prometheus", include_in_schema=False)
    async def metrics() -> Response:
        return Response(
            content=prometheus_metrics.get_metrics(),
            media_type=prometheus_metrics.get_content_type(),
        )

    return app


app = create_app()
