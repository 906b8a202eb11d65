from __future__ import annotations

import os
from importlib import metadata
from pathlib import Path

DISTRIBUTION_NAME = "works-budget-ledger"
VERSION_ENV = "WBL_APP_VERSION"

_DEFAULT_APP_VERSION = "1.0.0"
# written by release builds next to this module
_VERSION_FILE = Path(__file__).with_name("app_version.txt")


def _read_version_from_file(path: Path) -> str | None:
    try:
        raw = path.read_text(encoding="utf-8").strip()
    except OSError:
        return None
    return raw or None


def _installed_version() -> str | None:
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return None


def get_app_version() -> str:
    """Version shown in logs and reports: env override, release file, installed metadata, default."""
    env_override = (os.getenv(VERSION_ENV) or "").strip()
    if env_override:
        return env_override
    return _read_version_from_file(_VERSION_FILE) or _installed_version() or _DEFAULT_APP_VERSION


__all__ = ["DISTRIBUTION_NAME", "VERSION_ENV", "get_app_version"]
