from __future__ import annotations

import importlib.util
import logging
import sys
from pathlib import Path

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from sqlalchemy.engine import Connection

from infra.db.base import build_engine
from infra.path import APP_NAME

logger = logging.getLogger(__name__)


def _app_dir() -> Path:
    """
    Directory the app runs from: the extraction dir of a frozen onefile build,
    the executable's folder for onedir builds, the project root in development.
    """
    if getattr(sys, "frozen", False):
        meipass = getattr(sys, "_MEIPASS", None)
        if meipass:
            return Path(meipass).resolve()
        return Path(sys.executable).resolve().parent
    return Path(__file__).resolve().parents[1]


def _installed_location() -> Path | None:
    """Where an installed wheel put the migration package, if it is importable."""
    spec = importlib.util.find_spec("migration")
    if spec is None or not spec.submodule_search_locations:
        return None
    return Path(next(iter(spec.submodule_search_locations)))


def _script_location() -> Path:
    app_dir = _app_dir()
    candidates = [
        app_dir / "migration",
        app_dir / "_internal" / "migration",
        app_dir / APP_NAME / "migration",
    ]
    installed = _installed_location()
    if installed is not None:
        candidates.append(installed)
    for candidate in candidates:
        if (candidate / "env.py").exists():
            return candidate
    raise RuntimeError(
        "Alembic script_location missing. Tried the following locations: "
        + ", ".join(str(p) for p in candidates)
    )


def _alembic_config(db_url: str, connection: Connection | None = None) -> Config:
    script_location = _script_location()
    alembic_ini = script_location / "alembic.ini"
    if not alembic_ini.exists():
        raise RuntimeError(f"Alembic config missing: {alembic_ini}")

    cfg = Config(str(alembic_ini))
    cfg.set_main_option("script_location", str(script_location))
    cfg.set_main_option("sqlalchemy.url", db_url)
    cfg.attributes["configure_logger"] = False
    if connection is not None:
        cfg.attributes["connection"] = connection
    return cfg


def current_revision(db_url: str) -> str | None:
    """Revision the database is stamped with, or None for an empty database."""
    engine = build_engine(db_url)
    try:
        with engine.connect() as conn:
            return MigrationContext.configure(conn).get_current_revision()
    finally:
        engine.dispose()


def run_migrations(db_url: str, connection: Connection | None = None) -> None:
    """Upgrade the ledger schema to head; ``connection`` reuses an open connection instead of a new engine."""
    logger.info("Upgrading schema at %s", db_url)
    command.upgrade(_alembic_config(db_url, connection), "head")
    if connection is None:
        logger.info("Schema at revision %s", current_revision(db_url))


__all__ = ["current_revision", "run_migrations"]
