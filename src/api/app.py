# This file builds the FastAPI application and registers all API routers.
# Middleware, metrics, error handling, and schema bootstrap are configured here in one place.
# Every request gets an `x-request-id` and `x-response-time-ms` header and is counted in Prometheus.

from __future__ import annotations

import logging
import time
import uuid

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import RequestResponseEndpoint

from src.api.api_config import get_api_config
from src.api.dependencies import get_database_client
from src.api.error_handlers import register_error_handlers
from src.api.routers.blogs import router as blogs_router
from src.api.routers.clientage import router as clientage_router
from src.api.routers.contacts import router as contacts_router
from src.api.routers.health import router as health_router
from src.api.routers.services import router as services_router
from src.api.routers.team import router as team_router
from src.common.logging import configure_logging

LOGGER = logging.getLogger("api")

API_HTTP_REQUESTS_TOTAL = Counter(
    "api_http_requests_total",
    "Total number of HTTP requests processed by the API.",
    ["method", "path", "status_code"],
)
API_HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "api_http_request_duration_seconds",
    "API request duration in seconds.",
    ["method", "path"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10),
)
API_HTTP_INFLIGHT_REQUESTS = Gauge(
    "api_http_inflight_requests",
    "Number of API requests currently being processed.",
    ["method", "path"],
)


def _route_label(request: Request) -> str:
    # Route template such as `/api/blogs/{blog_id}`; falls back to the raw path for unmatched routes.
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


def create_app() -> FastAPI:
    """Create configured FastAPI application instance."""

    configure_logging()
    config = get_api_config()

    app = FastAPI(
        title=config.api_name,
        description=(
            "Content API for the firm's website: blog posts, service listings, team members, "
            "clientage categories, and contact inquiries."
        ),
        version=config.app_version,
        openapi_tags=[
            {"name": "health", "description": "Service liveness, readiness, and version metadata."},
            {"name": "blogs", "description": "Blog posts with optional cover images."},
            {"name": "services", "description": "Service listings offered by the firm."},
            {"name": "team", "description": "Team member profiles keyed by employee ID."},
            {"name": "clientage", "description": "Client categories and the client types within them."},
            {"name": "contacts", "description": "Inbound contact inquiries and their statistics."},
        ],
    )

    if config.allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.allowed_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.middleware("http")
    async def request_context_middleware(
        request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id

        method_label = request.method
        started = time.perf_counter()
        status_code = 500
        API_HTTP_INFLIGHT_REQUESTS.labels(method=method_label, path=request.url.path).inc()
        try:
            response: Response = await call_next(request)
            status_code = response.status_code
            duration_ms = (time.perf_counter() - started) * 1000.0

            response.headers["x-request-id"] = request_id
            response.headers["x-response-time-ms"] = f"{duration_ms:.2f}"
            return response
        finally:
            duration_s = time.perf_counter() - started
            path_label = _route_label(request)
            API_HTTP_REQUESTS_TOTAL.labels(
                method=method_label,
                path=path_label,
                status_code=str(status_code),
            ).inc()
            API_HTTP_REQUEST_DURATION_SECONDS.labels(
                method=method_label,
                path=path_label,
            ).observe(duration_s)
            API_HTTP_INFLIGHT_REQUESTS.labels(method=method_label, path=request.url.path).dec()

    @app.get("/metrics", include_in_schema=False)
    def metrics() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @app.on_event("startup")
    def startup_checks() -> None:
        try:
            db = get_database_client()
            app.state.db_connected_at_startup = db.can_connect()
        except SQLAlchemyError as exc:
            LOGGER.warning("Database schema bootstrap failed at startup: %s", exc)
            app.state.db_connected_at_startup = False

    register_error_handlers(app)

    app.include_router(health_router, prefix=config.api_prefix)
    app.include_router(blogs_router, prefix=config.api_prefix)
    app.include_router(services_router, prefix=config.api_prefix)
    app.include_router(team_router, prefix=config.api_prefix)
    app.include_router(clientage_router, prefix=config.api_prefix)
    app.include_router(contacts_router, prefix=config.api_prefix)

    return app


app = create_app()
