# app/main.py
from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from contextlib import asynccontextmanager
from datetime import datetime
import logging
import time
import uuid
from typing import Callable

from .config import settings
from .api.v1.router import api_router
from .database import init_db, close_db, get_db_stats, check_db_health

# ============================================================
# Logging
# ============================================================
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Analytics calls recompute the whole platform; flag the slow ones
SLOW_REQUEST_SECONDS = 2.0


def analytics_clock() -> str:
    return settings.ANALYTICS_TIMEZONE or "host local time"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"🚀 Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"🕒 Monthly windows use {analytics_clock()}, amounts in {settings.CURRENCY}")

    await run_in_threadpool(init_db)

    yield

    logger.info(f"🛑 Shutting down {settings.APP_NAME}")
    await run_in_threadpool(close_db)


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Subscription revenue attribution for streaming content providers",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url=None,
    openapi_url="/openapi.json" if settings.DEBUG else None,
    lifespan=lifespan,
)

# ============================================================
# Middleware
# ============================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Authorization", "Content-Type"],
)


@app.middleware("http")
async def trace_requests(request: Request, call_next: Callable):
    """Tag each request with an id, time it and log the outcome"""
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = request_id
    started = time.perf_counter()

    response = await call_next(request)

    duration = time.perf_counter() - started
    message = (
        f"{request.method} {request.url.path} [{response.status_code}] "
        f"{duration:.3f}s id={request_id}"
    )
    if duration >= SLOW_REQUEST_SECONDS:
        logger.warning(f"🐢 Slow request: {message}")
    else:
        logger.info(f"➡️ {message}")

    response.headers["X-Request-ID"] = request_id
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["Cache-Control"] = "no-store"
    if settings.HTTPS_ONLY:
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
    return response


app.include_router(api_router, prefix="/api/v1")

# ============================================================
# Health
# ============================================================

@app.get("/health", tags=["Health"])
async def health_check() -> dict:
    """Liveness probe, no dependencies touched"""
    return {
        "status": "healthy",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "timestamp": datetime.utcnow().isoformat()
    }


@app.get("/health/detailed", tags=["Health"])
def health_check_detailed() -> dict:
    """Database connectivity and pool usage, plus the analytics clock in use"""
    db_healthy = check_db_health()

    return {
        "status": "healthy" if db_healthy else "degraded",
        "database": "connected" if db_healthy else "disconnected",
        "pool": get_db_stats(),
        "analytics_timezone": analytics_clock(),
        "currency": settings.CURRENCY,
        "timestamp": datetime.utcnow().isoformat()
    }

# ============================================================
# Exception Handlers
# ============================================================

def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "unknown")


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    """Data access failures that escaped an endpoint"""
    request_id = _request_id(request)
    logger.error(f"❌ Database error [Request ID: {request_id}]: {exc}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content={"detail": "Database error", "request_id": request_id}
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    request_id = _request_id(request)
    logger.error(f"❌ Unhandled exception [Request ID: {request_id}]: {exc}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content={
            "detail": str(exc) if settings.DEBUG else "Internal server error",
            "request_id": request_id
        }
    )


@app.exception_handler(404)
async def not_found_handler(request: Request, exc):
    return JSONResponse(
        status_code=404,
        content={
            "detail": getattr(exc, "detail", None) or "Endpoint not found",
            "path": str(request.url.path)
        }
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
