"""Health check endpoints."""
from fastapi import APIRouter, Depends, status, Response
from sqlalchemy.orm import Session
from sqlalchemy import inspect, text

from techelevate.db import get_db
from techelevate.startup import REQUIRED_TABLES

router = APIRouter(tags=["health"])


@router.get("/")
async def root():
    return {"message": "TechElevate Server is Running!"}


@router.get("/health")
async def health():
    """
    Basic health check - process is alive.

    Returns 200 if the application is running.
    """
    return {"status": "healthy"}


@router.get("/ready")
async def ready(response: Response, db: Session = Depends(get_db)):
    """
    Readiness check - verifies database connectivity and required tables.

    Returns 200 if ready to accept traffic, 503 if not ready.
    """
    try:
        conn = db.connection()
        conn.execute(text("SELECT 1"))
        existing_tables = set(inspect(conn).get_table_names())
    except Exception as e:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return {
            "status": "not_ready",
            "database": "disconnected",
            "error": str(e),
            "message": "Database connection failed"
        }

    missing_tables = set(REQUIRED_TABLES) - existing_tables
    if missing_tables:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return {
            "status": "not_ready",
            "database": "connected",
            "tables": "missing",
            "missing_tables": sorted(missing_tables),
            "message": "Run migrations: alembic upgrade head"
        }

    return {
        "status": "ready",
        "database": "connected",
        "tables": "present"
    }
