"""FastAPI application entrypoint."""
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError

from techelevate.routers import (
    health, auth, users, products, reviews, moderation, coupons, payments, admin
)
from techelevate.db import close_db
from techelevate.settings import settings
from techelevate.startup import run_startup_validation
from techelevate.services.errors import ServiceError, StoreUnavailable
from techelevate.middleware import RequestLoggingMiddleware, setup_logging

# Configure logging before anything else
setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan.

    Validates settings and the database before accepting traffic and
    releases the connection pool on shutdown.
    """
    logger.info(f"Starting application in {settings.ENV} environment")

    try:
        run_startup_validation()
    except Exception as e:
        logger.error(f"Startup validation failed: {e}")
        logger.error("Application will not start")
        raise

    yield

    logger.info("Shutting down application")
    close_db()


app = FastAPI(
    title="TechElevate API",
    description="Product showcase with moderation, community voting and subscriptions",
    version="0.1.0",
    lifespan=lifespan
)

# Last added is executed first
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    """Render service failures in the same shape as HTTPException."""
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(OperationalError)
async def store_error_handler(request: Request, exc: OperationalError):
    logger.error(
        f"Store unavailable on {request.method} {request.url.path}: {exc}",
        exc_info=exc
    )
    error = StoreUnavailable()
    return JSONResponse(status_code=error.status_code, content={"detail": error.message})


app.include_router(health.router)
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(products.router)
app.include_router(reviews.router)
app.include_router(moderation.router)
app.include_router(coupons.router)
app.include_router(payments.router)
app.include_router(admin.router)
