# ============================================================================
# FILE: songly/db/session.py
# ============================================================================
from typing import Generator
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool
from songly.config import settings
import logging

logger = logging.getLogger(__name__)

def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value

def build_engine(database_url: str = None) -> Engine:
    """Create an engine; SQLite connections get foreign keys and a Unicode-aware lower()"""
    database_url = database_url or settings.DATABASE_URL
    kwargs = {}

    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        # In-memory databases only live as long as their single connection
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool

    engine = create_engine(database_url, **kwargs)

    if engine.dialect.name == "sqlite":
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        @event.listens_for(engine, "connect")
        def _register_unicode_lower(dbapi_connection, connection_record):
            # SQLite's built-in lower() only folds ASCII; match str.lower()
            dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)

    logger.debug(f"Database engine created for {engine.url.render_as_string(hide_password=True)}")
    return engine

engine = build_engine()
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency yielding one session per request"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
