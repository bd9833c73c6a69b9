"""Alembic environment for the shipctl schema.

Online runs open the database through :func:`create_db_engine`, so a
migration gets the same WAL, foreign-key and explicit BEGIN handling as
the application. Offline runs (``--sql``) only render statements.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from alembic import context
from sqlalchemy.engine import make_url

from shipctl.infrastructure.database.engine import create_db_engine
from shipctl.infrastructure.database.schema import metadata

config = context.config


def _configure(**kwargs: Any) -> None:
    # SQLite cannot ALTER most constraints in place; batch mode rebuilds tables.
    context.configure(target_metadata=metadata, render_as_batch=True, **kwargs)


def _db_path() -> Path:
    path = config.attributes.get("db_path")
    if path is not None:
        return Path(path)
    database = make_url(config.get_main_option("sqlalchemy.url") or "").database
    if not database:
        msg = "shipctl migrations need a file-backed sqlite URL"
        raise RuntimeError(msg)
    return Path(database)


def run_migrations_offline() -> None:
    _configure(
        url=config.get_main_option("sqlalchemy.url"),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    engine = create_db_engine(
        _db_path(), busy_timeout=float(config.attributes.get("busy_timeout", 30.0))
    )
    try:
        with engine.connect() as connection:
            _configure(connection=connection)
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
