"""
FastAPI application - primary inbound adapter.
"""
from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.src.infrastructure.config import Settings
from backend.src.infrastructure.logging_config import setup_logging

logger = logging.getLogger(__name__)

settings = Settings()

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup/shutdown lifecycle."""
    setup_logging(settings.logging.level)
    settings.validate_production()
    logger.info("TempoPush backend starting up (persistence=%s)...", settings.persistence_backend)
    from backend.src.infrastructure.container import ApplicationContainer
    container = ApplicationContainer(settings)
    await container.init_storage()
    app.state.container = container
    yield
    logger.info("TempoPush backend shutting down...")
    await container.aclose()


app = FastAPI(
    title="TempoPush API",
    description="Task time logging with Web Push progress notifications",
    version=VERSION,
    lifespan=lifespan,
)

# CORS: mirror the caller's origin unless an allow-list is configured
if settings.web.allowed_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.web.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
else:
    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=".*",
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )


@app.middleware("http")
async def request_logging_middleware(request: Request, call_next):
    """Log each request with method, path, status, and duration."""
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    if request.url.path.startswith("/api"):
        response.headers["cache-control"] = "no-store, no-cache, must-revalidate"
    logger.info(
        "%s %s -> %d (%.1fms)",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
    )
    return response


from backend.src.core.exceptions import (
    InvalidInputError,
    StoreError,
    TaskNotFoundError,
)


@app.exception_handler(TaskNotFoundError)
async def task_not_found_handler(request: Request, exc: TaskNotFoundError):
    return JSONResponse(status_code=404, content={"detail": "task not found"})


@app.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"detail": "missing/invalid fields"})


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled exception on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# ── API routes ─────────────────────────────────────────────────

from backend.src.adapters.inbound.api.milestones import router as milestones_router
from backend.src.adapters.inbound.api.push import router as push_router
from backend.src.adapters.inbound.api.tasks import router as tasks_router

app.include_router(push_router, prefix="/api/push", tags=["push"])
app.include_router(tasks_router, prefix="/api/tasks", tags=["tasks"])
app.include_router(milestones_router, prefix="/api/milestones", tags=["milestones"])


@app.get("/api/health")
async def health():
    return {
        "status": "ok",
        "version": VERSION,
        "persistence_backend": settings.persistence_backend,
    }


@app.get("/api/config/push")
async def push_config():
    """Return the public VAPID key the browser needs for PushManager.subscribe()."""
    return {
        "enabled": settings.push.configured,
        "publicKey": settings.push.public_key,
    }
