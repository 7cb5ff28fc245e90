import time
import logging
import structlog
from fastapi import FastAPI, Request

from .application.roster_store import RosterStore
from .infrastructure.metrics import (
    metrics_endpoint,
    http_requests_total,
    http_request_duration_seconds
)
from .infrastructure.storage import build_store
from .interfaces.http.deps import start_catalog
from .interfaces.http.routers import courses as courses_router
from .interfaces.http.routers import dashboard as dashboard_router
from .interfaces.http.routers import students as students_router
from .config import settings

# Structured logging
log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.make_filtering_bound_logger(log_level),
    context_class=dict,
    logger_factory=structlog.PrintLoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()

app = FastAPI(title="Roster Service", version="0.1.0")

# Charset header, metrics and request log
@app.middleware("http")
async def add_charset_header(request: Request, call_next):
    start_time = time.time()
    method = request.method
    path = request.url.path

    response = await call_next(request)

    if response.headers.get("content-type", "").startswith("application/json"):
        response.headers["content-type"] = "application/json; charset=utf-8"

    duration = time.time() - start_time
    status_code = response.status_code
    http_requests_total.labels(method=method, endpoint=path, status=status_code).inc()
    http_request_duration_seconds.labels(method=method, endpoint=path).observe(duration)

    logger.info(
        "http_request",
        method=method,
        path=path,
        status_code=status_code,
        duration_ms=round(duration * 1000, 2)
    )

    return response


def init_storage():
    if settings.STORAGE_BACKEND.lower() == "sql":
        from .infrastructure.db import engine
        from .infrastructure.models import Base
        Base.metadata.create_all(bind=engine)
    return build_store()


@app.on_event("startup")
async def on_startup():
    logger.info("Starting roster service", version="0.1.0", backend=settings.STORAGE_BACKEND)
    if getattr(app.state, "store", None) is None:
        app.state.store = RosterStore(init_storage(), key=settings.ROSTER_KEY)
    app.state.store.load()
    start_catalog(app)


@app.on_event("shutdown")
def on_shutdown():
    catalog = getattr(app.state, "catalog", None)
    if catalog is not None:
        catalog.close()


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/metrics")
def metrics():
    """Prometheus metrics endpoint"""
    return metrics_endpoint()


app.include_router(students_router.router)
app.include_router(courses_router.router)
app.include_router(dashboard_router.router)
