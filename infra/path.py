# infra/path.py
from __future__ import annotations
import os
import sys
from pathlib import Path

APP_NAME = "WorksBudgetLedger"
COMPANY_NAME = "PublicWorks"
DATA_DIR_ENV = "WBL_DATA_DIR"
DB_FILE_NAME = "works_budget.db"


def _platform_base() -> Path:
    if sys.platform.startswith("win"):
        return Path(os.getenv("APPDATA", Path.home() / "AppData" / "Roaming"))
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"
    return Path(os.getenv("XDG_DATA_HOME", Path.home() / ".local" / "share"))


def _ensure(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def user_data_dir() -> Path:
    """
    Per-user directory holding the ledger database, logs and reports.

    ``WBL_DATA_DIR`` wins when set; otherwise the platform location is used
    (``%APPDATA%``, ``~/Library/Application Support`` or ``$XDG_DATA_HOME``)
    under ``PublicWorks/WorksBudgetLedger``. If that cannot be created the
    ledger falls back to a dot-directory in the home folder.
    """
    override = (os.getenv(DATA_DIR_ENV) or "").strip()
    if override:
        return _ensure(Path(override).expanduser())
    try:
        return _ensure(_platform_base() / COMPANY_NAME / APP_NAME)
    except OSError:
        return _ensure(Path.home() / f".{APP_NAME}")


def default_db_path() -> Path:
    return user_data_dir() / DB_FILE_NAME


def default_reports_dir() -> Path:
    return user_data_dir() / "reports"


__all__ = ["user_data_dir", "default_db_path", "default_reports_dir"]
