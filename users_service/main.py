import time
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from .config import Settings, settings as default_settings
from .infrastructure.db import UserStore
from .infrastructure.logging import configure_logging
from .infrastructure.metrics import (
    metrics_endpoint,
    http_requests_total,
    http_request_duration_seconds
)
from .interfaces.http.routers import users as users_router
from .interfaces.http.routers import ui as ui_router

VERSION = "0.1.0"

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    store: UserStore = app.state.store
    logger.info("Starting users service", version=VERSION)
    store.open()
    cfg: Settings = app.state.settings
    logger.info("Server running", url=f"http://localhost:{cfg.PORT}")
    try:
        yield
    finally:
        store.close()


def create_app(settings: Settings | None = None, store: UserStore | None = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(title="Users Service", version=VERSION, lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store if store is not None else UserStore(settings.DATABASE_URL)

    # UI может жить на отдельном dev-сервере и ходить к API через API_URL
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()
        method = request.method
        path = request.url.path

        # необработанное исключение дойдёт до клиента как 500
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            duration = time.time() - start_time
            http_requests_total.labels(method=method, endpoint=path, status=status_code).inc()
            http_request_duration_seconds.labels(method=method, endpoint=path).observe(duration)

            logger.info(
                "http_request",
                method=method,
                path=path,
                status_code=status_code,
                duration_ms=round(duration * 1000, 2)
            )

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.get("/metrics")
    def metrics():
        """Prometheus metrics endpoint"""
        return metrics_endpoint()

    app.include_router(users_router.router)
    app.include_router(ui_router.router)
    app.mount("/static", StaticFiles(directory=str(ui_router.STATIC_DIR)), name="static")
    return app


app = create_app()
