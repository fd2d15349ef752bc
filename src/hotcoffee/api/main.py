from __future__ import annotations

import logging
import os
import time
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import Counter, Histogram
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from hotcoffee.api.dependencies import build_storage
from hotcoffee.api.error_handling import register_exception_handlers
from hotcoffee.api.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware
from hotcoffee.api.routes.health import router as health_router
from hotcoffee.api.routes.inventory import router as inventory_router
from hotcoffee.api.routes.menu import router as menu_router
from hotcoffee.api.routes.metrics import router as metrics_router
from hotcoffee.api.routes.orders import router as orders_router
from hotcoffee.api.routes.reports import router as reports_router
from hotcoffee.infrastructure.observability.logging_config import configure_logging
from hotcoffee.infrastructure.observability.otel import configure_otel
from hotcoffee.infrastructure.storage.settings import ensure_storage, get_data_dir

logger = logging.getLogger("hotcoffee.api.access")

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total number of HTTP requests",
    ["method", "path", "status_code"],
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "path"],
)


def _cors_allow_origins() -> list[str]:
    env = os.getenv("APP_ENV", "dev").lower()

    if env in {"dev", "test"}:
        return ["*"]

    raw_value = os.getenv("CORS_ALLOW_ORIGINS", "")
    return [origin.strip() for origin in raw_value.split(",") if origin.strip()]


def _route_template(request: Request) -> str:
    # Label metrics by route template so ids do not explode label cardinality.
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)


class AccessLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        method = request.method
        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.perf_counter() - started) * 1000
            path = _route_template(request)
            REQUEST_COUNT.labels(method=method, path=path, status_code="500").inc()
            REQUEST_LATENCY.labels(method=method, path=path).observe(duration_ms / 1000)
            logger.exception(
                "request_error",
                extra={
                    "method": method,
                    "path": request.url.path,
                    "status_code": 500,
                    "duration_ms": round(duration_ms, 2),
                },
            )
            raise

        duration_ms = (time.perf_counter() - started) * 1000
        path = _route_template(request)
        REQUEST_COUNT.labels(method=method, path=path, status_code=str(response.status_code)).inc()
        REQUEST_LATENCY.labels(method=method, path=path).observe(duration_ms / 1000)
        logger.info(
            "request_complete",
            extra={
                "method": method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    ensure_storage(app.state.storage.data_dir)
    logger.info("storage_ready", extra={"data_dir": str(app.state.storage.data_dir)})
    yield


def create_app(data_dir: Path | None = None) -> FastAPI:
    configure_logging()

    app = FastAPI(title="Hot Coffee", version="0.1.0", lifespan=lifespan)
    app.state.storage = build_storage(data_dir or get_data_dir())

    register_exception_handlers(app)
    app.include_router(health_router)
    app.include_router(metrics_router)
    app.include_router(inventory_router)
    app.include_router(menu_router)
    app.include_router(orders_router)
    app.include_router(reports_router)

    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_allow_origins(),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )

    configure_otel(app)
    return app


app = create_app()
