from __future__ import annotations

import shutil
from pathlib import Path

import pytest

import infra.migrate as migrate

ROOT = Path(__file__).resolve().parents[1]


def test_pyproject_ships_the_alembic_environment():
    tomllib = pytest.importorskip("tomllib")
    config = tomllib.loads((ROOT / "pyproject.toml").read_text(encoding="utf-8"))
    setuptools_cfg = config["tool"]["setuptools"]

    assert "migration*" in setuptools_cfg["packages"]["find"]["include"]
    assert set(setuptools_cfg["package-data"]["migration"]) >= {"alembic.ini", "script.py.mako"}
    for rel in ("migration/env.py", "migration/alembic.ini", "migration/script.py.mako"):
        assert (ROOT / rel).exists(), rel
    assert list((ROOT / "migration" / "versions").glob("*.py"))


def test_migrations_run_from_a_site_packages_layout(tmp_path, monkeypatch):
    site = tmp_path / "site-packages"
    shutil.copytree(ROOT / "migration", site / "migration", ignore=shutil.ignore_patterns("__pycache__"))
    monkeypatch.setattr(migrate, "_app_dir", lambda: site)
    monkeypatch.setattr(migrate, "_installed_location", lambda: None)
    db_url = f"sqlite:///{(tmp_path / 'installed.db').as_posix()}"

    assert migrate._script_location() == site / "migration"
    migrate.run_migrations(db_url)

    assert migrate.current_revision(db_url) == "4b1e0c7a9d52"


def test_installed_package_location_is_used_when_app_dir_has_none(tmp_path, monkeypatch):
    wheel_dir = tmp_path / "lib" / "migration"
    shutil.copytree(ROOT / "migration", wheel_dir, ignore=shutil.ignore_patterns("__pycache__"))
    monkeypatch.setattr(migrate, "_app_dir", lambda: tmp_path / "bin")
    monkeypatch.setattr(migrate, "_installed_location", lambda: wheel_dir)

    assert migrate._script_location() == wheel_dir


def test_missing_alembic_environment_is_reported(tmp_path, monkeypatch):
    monkeypatch.setattr(migrate, "_app_dir", lambda: tmp_path / "empty")
    monkeypatch.setattr(migrate, "_installed_location", lambda: None)

    with pytest.raises(RuntimeError, match="script_location missing"):
        migrate.run_migrations(f"sqlite:///{(tmp_path / 'x.db').as_posix()}")
