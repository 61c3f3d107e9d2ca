"""Database engine, session factory and declarative base."""
import logging
from typing import Any, Dict, Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from techelevate.settings import settings

logger = logging.getLogger(__name__)


def engine_options(url: str) -> Dict[str, Any]:
    """Engine keyword arguments for a database URL."""
    if url.startswith("sqlite"):
        options: Dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            # A single shared connection keeps the in-memory schema alive
            options["poolclass"] = StaticPool
        return options
    return {"pool_pre_ping": True}


def enable_sqlite_foreign_keys(bind: Engine) -> None:
    """SQLite ignores ON DELETE CASCADE unless foreign keys are switched on."""
    @event.listens_for(bind, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_engine(settings.DATABASE_URL, **engine_options(settings.DATABASE_URL))
if settings.DATABASE_URL.startswith("sqlite"):
    enable_sqlite_foreign_keys(engine)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Yield a session for one request and close it afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def close_db() -> None:
    """Release every pooled connection. Called once at process shutdown."""
    engine.dispose()
    logger.info("Database connections closed")
