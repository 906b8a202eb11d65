# infra/db/base.py
from __future__ import annotations
import logging
import os

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from infra.path import default_db_path

logger = logging.getLogger(__name__)

DB_URL_ENV = "WBL_DB_URL"

Base = declarative_base()


def default_db_url() -> str:
    """``WBL_DB_URL`` if set, else the SQLite ledger file in the user data dir."""
    override = (os.getenv(DB_URL_ENV) or "").strip()
    if override:
        return override
    return f"sqlite:///{default_db_path().as_posix()}"


def _enable_sqlite_foreign_keys(dbapi_connection, _record) -> None:
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA foreign_keys=ON")
    finally:
        cursor.close()


def build_engine(db_url: str | None = None) -> Engine:
    url = db_url or default_db_url()
    logger.info("Using database at: %s", url)
    engine = create_engine(url, echo=False, future=True)
    if engine.dialect.name == "sqlite":
        # links reference instruments with RESTRICT; SQLite only honours it with the pragma
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
