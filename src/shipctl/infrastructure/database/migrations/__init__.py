"""Alembic scripts for the shipctl schema.

Configuration is built in code (no ``alembic.ini``); revision files live
in ``versions/`` beside this module.
"""

from __future__ import annotations

from pathlib import Path

from alembic.config import Config

SCRIPT_LOCATION = Path(__file__).parent


def migration_config(db_path: Path, *, busy_timeout: float = 30.0) -> Config:
    """Alembic Config targeting the SQLite file at *db_path*."""
    cfg = Config()
    cfg.set_main_option("script_location", str(SCRIPT_LOCATION))
    cfg.set_main_option("sqlalchemy.url", f"sqlite:///{db_path}")
    cfg.attributes["db_path"] = db_path
    cfg.attributes["busy_timeout"] = busy_timeout
    return cfg
