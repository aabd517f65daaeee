"""Main FastAPI application."""
import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.api import dashboard, health, menu, orders, realtime
from app.core.config import get_settings
from app.core.errors import NotFoundError, StoreUnavailableError, ValidationError
from app.core.logging import setup_logging
from app.db.database import Database
from app.services.realtime.notifier import RealtimeNotifier

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    settings = get_settings()
    setup_logging(settings.log_level)
    app.state.database = Database.from_settings(settings)
    app.state.notifier = RealtimeNotifier(queue_size=settings.realtime_queue_size)
    await app.state.database.init_models()
    logger.info(f"{settings.restaurant_name} order server ready")
    yield
    # Shutdown
    await app.state.database.dispose()


settings = get_settings()

app = FastAPI(
    title="Order Lifecycle & Analytics",
    description="Restaurant order intake, live dashboard updates and sales analytics",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logger.warning(f"[{request.method} {request.url.path}] Rejected: {exc}")
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    logger.warning(f"[{request.method} {request.url.path}] {exc}")
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(StoreUnavailableError)
async def store_unavailable_handler(request: Request, exc: StoreUnavailableError) -> JSONResponse:
    logger.error(f"[{request.method} {request.url.path}] {exc}")
    return JSONResponse(
        status_code=503,
        content={"detail": str(exc), "retriable": exc.retriable},
        headers={"Retry-After": "5"},
    )


# Include routers (must be before static file mounting to take precedence)
app.include_router(health.router, tags=["health"])
app.include_router(orders.router, tags=["orders"])
app.include_router(dashboard.router, tags=["dashboard"])
app.include_router(realtime.router, tags=["realtime"])
app.include_router(menu.router, tags=["menu"])

# Mount static files (dashboard frontend)
if os.path.isdir(settings.static_dir):
    app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.host, port=settings.port)
