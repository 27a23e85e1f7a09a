# academy/core/db.py - engine, request-scoped sessions and parameterized SQL helpers
import logging
from contextlib import contextmanager
from datetime import date, datetime
from typing import Any, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from academy.core.config import settings
from academy.models.base import Base

logger = logging.getLogger(__name__)


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_size": settings.DB_POOL_SIZE, "pool_pre_ping": True}


engine = create_engine(settings.DATABASE_URL, future=True, **_engine_options(settings.DATABASE_URL))
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)

@contextmanager
def db_session():
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

# FastAPI dependency
def get_db():
    with db_session() as db:
        yield db

def create_tables(bind=None):
    """Create all tables in the database"""
    from academy import models  # noqa: F401  registers every table on Base.metadata
    Base.metadata.create_all(bind=bind or engine)


def _prepare_params(params: Optional[dict]) -> dict:
    """Dates are bound as ISO strings so the same SQL runs on every backend"""
    safe_params = {}
    for key, value in (params or {}).items():
        if isinstance(value, (date, datetime)):
            safe_params[key] = value.isoformat()
        else:
            safe_params[key] = value
    return safe_params

def db_execute_safe(db: Session, query: str, params: dict = None):
    """Execute a SELECT and return rows as mappings"""
    try:
        result = db.execute(text(query), _prepare_params(params))
        return result.mappings().all()
    except SQLAlchemyError:
        logger.debug("Query failed: %s | params=%s", query, params)
        raise

def db_execute_non_select(db: Session, query: str, params: dict = None) -> int:
    """Execute INSERT/UPDATE/DELETE and return the affected row count"""
    try:
        result = db.execute(text(query), _prepare_params(params))
        return result.rowcount
    except SQLAlchemyError:
        logger.debug("Statement failed: %s | params=%s", query, params)
        raise

def for_update(db: Session) -> str:
    """Row lock suffix; SQLite serializes writers itself and has no FOR UPDATE"""
    if db.get_bind().dialect.name == "sqlite":
        return ""
    return " FOR UPDATE"


_MISSING_TABLE_CODES = {"42P01", "1146"}

def is_missing_table_error(exc: BaseException) -> bool:
    """True when the driver reports that a table does not exist yet"""
    if not isinstance(exc, DBAPIError):
        return False
    orig = exc.orig
    code = getattr(orig, "pgcode", None)
    if code is None and getattr(orig, "args", None):
        code = orig.args[0]
    if str(code) in _MISSING_TABLE_CODES:
        return True
    return "no such table" in str(orig).lower()


def as_date(value: Any) -> Optional[date]:
    """Normalize a DATE column value; SQLite hands them back as strings"""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])

def as_iso(value: Any) -> Optional[str]:
    d = as_date(value)
    return d.isoformat() if d else None
