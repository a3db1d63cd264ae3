from contextlib import asynccontextmanager
from datetime import datetime, timezone
import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from app.config import settings
from app.api.v1.router import api_router
from app.core.exceptions import AppError
from app.database import init_db, async_session_factory


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
    - Configure logging
    - Create any missing tables
    """
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")

    await init_db()

    yield

    logger.info(f"Shutting down {settings.APP_NAME}")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Inventory, invoicing and purchase ledger API for a parts business.",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    """Render domain errors with their own status code and kind."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message} ({exc.error})")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc.message} ({exc.error})")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies and query strings are client errors (400)."""
    return JSONResponse(
        status_code=400,
        content={
            "message": "Invalid request",
            "kind": "validation",
            "detail": jsonable_encoder(exc.errors()),
        },
    )


# Global exception handler for anything not handled above
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={
            "message": "Internal server error",
            "error": str(exc),
            "kind": "error",
            "path": str(request.url.path),
        },
    )


async def _database_check() -> str:
    async with async_session_factory() as session:
        await session.execute(text("SELECT 1"))
    return "connected"


@app.get("/health", tags=["Health"])
async def health_check():
    """Liveness plus a round trip to the database; 503 when the database is unreachable."""
    healthy = True
    try:
        database = await _database_check()
    except Exception as e:
        logger.error(f"Health check could not reach the database: {e}")
        healthy = False
        database = f"error: {e}"

    body = {
        "status": "healthy" if healthy else "unhealthy",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": {"database": database},
    }
    return body if healthy else JSONResponse(status_code=503, content=body)


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint."""
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "redoc": "/redoc",
    }
