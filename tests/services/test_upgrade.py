"""Tests for UpgradeService: Alembic check, apply, stamp."""

from __future__ import annotations

from pathlib import Path

from sqlalchemy import text

from shipctl.infrastructure.store import Store
from shipctl.services.upgrade import UpgradeService


class TestUpgradeService:
    def test_fresh_database_has_pending_baseline(self, store: Store) -> None:
        result = UpgradeService(store).check_pending()
        assert result.ok
        assert result.data["current"] is None
        assert result.data["head"] == "001_baseline"
        assert result.data["pending_count"] == 1
        assert result.data["pending"][0]["revision"] == "001_baseline"

    def test_stamp_current(self, store: Store) -> None:
        svc = UpgradeService(store)
        result = svc.stamp_current()
        assert result.ok
        assert result.data == {"stamped": True, "current": "001_baseline"}
        assert svc.check_pending().data["pending_count"] == 0

    def test_apply_stamps_existing_tables(self, store: Store) -> None:
        result = UpgradeService(store).apply()
        assert result.ok
        assert result.data["applied_count"] == 1
        assert result.data["current"] == "001_baseline"
        with store.engine.connect() as conn:
            version = conn.execute(text("SELECT version_num FROM alembic_version")).scalar_one()
        assert version == "001_baseline"

    def test_apply_writes_backup(self, store: Store) -> None:
        result = UpgradeService(store).apply()
        backups = list((store.db_path.parent / "backups").glob("*.db"))
        assert len(backups) == 1
        assert str(backups[0]) == result.data["backup_path"]

    def test_apply_up_to_date(self, store: Store) -> None:
        svc = UpgradeService(store)
        svc.stamp_current()
        result = svc.apply()
        assert result.ok
        assert result.data["applied_count"] == 0
        assert "up to date" in result.data["message"]


class TestMigrationScripts:
    def test_baseline_builds_schema_from_empty(self, tmp_path: Path) -> None:
        from alembic import command
        from sqlalchemy import create_engine, inspect

        from shipctl.infrastructure.database.migrations import migration_config

        db_path = tmp_path / "empty.db"
        command.upgrade(migration_config(db_path, busy_timeout=5.0), "head")

        engine = create_engine(f"sqlite:///{db_path}")
        try:
            tables = set(inspect(engine).get_table_names())
        finally:
            engine.dispose()
        assert {"shipments", "pricing_configs", "customers", "alembic_version"} <= tables

    def test_baseline_downgrade(self, tmp_path: Path) -> None:
        from alembic import command
        from sqlalchemy import create_engine, inspect

        from shipctl.infrastructure.database.migrations import migration_config

        db_path = tmp_path / "roundtrip.db"
        cfg = migration_config(db_path)
        command.upgrade(cfg, "head")
        command.downgrade(cfg, "base")

        engine = create_engine(f"sqlite:///{db_path}")
        try:
            tables = set(inspect(engine).get_table_names())
        finally:
            engine.dispose()
        assert "shipments" not in tables
