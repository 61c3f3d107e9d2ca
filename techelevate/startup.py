"""Application startup validation."""
import logging
from typing import Optional

from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine

from techelevate.db import engine
from techelevate.settings import settings
from techelevate.services.errors import StoreUnavailable

logger = logging.getLogger(__name__)

REQUIRED_TABLES = (
    'users',
    'products',
    'product_votes',
    'product_reports',
    'coupons',
    'reviews',
)


def validate_settings() -> None:
    """
    Validate all required settings at startup.

    Raises:
        ValueError: If required settings are missing or invalid
    """
    logger.info(f"Validating settings for ENV={settings.ENV}")

    settings.validate_required_for_env()
    settings.validate_payment_config()

    logger.info("✓ Settings validation passed")


def validate_database(bind: Optional[Engine] = None) -> None:
    """
    Validate database connection and required tables.

    Raises:
        StoreUnavailable: If the database is unreachable or tables are missing
    """
    bind = bind or engine
    logger.info("Validating database connection...")

    try:
        with bind.connect() as conn:
            conn.execute(text("SELECT 1"))
            existing_tables = set(inspect(conn).get_table_names())
    except Exception as e:
        logger.error(f"✗ Database validation failed: {e}")
        raise StoreUnavailable(f"Database connection failed: {e}") from e

    logger.info("✓ Database connection successful")

    missing_tables = set(REQUIRED_TABLES) - existing_tables
    if missing_tables:
        raise StoreUnavailable(
            f"Missing required database tables: {', '.join(sorted(missing_tables))}. "
            "Run migrations with: alembic upgrade head"
        )

    logger.info(f"✓ All required tables present: {', '.join(REQUIRED_TABLES)}")


def run_startup_validation() -> None:
    """
    Run all startup validations.

    Raises:
        Exception: If any validation fails
    """
    logger.info("=" * 60)
    logger.info("Starting application startup validation")
    logger.info("=" * 60)

    try:
        validate_settings()
        validate_database()

        logger.info("=" * 60)
        logger.info("✓ All startup validations passed")
        logger.info("=" * 60)

    except Exception as e:
        logger.error("=" * 60)
        logger.error("✗ Startup validation failed")
        logger.error("=" * 60)
        logger.error(f"Error: {e}")
        logger.error("Application will not start until this is resolved.")
        raise
