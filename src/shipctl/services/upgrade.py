"""UpgradeService: database migration with Alembic.

Pipeline: CHECK → BACKUP → MIGRATE → REPORT
"""

from __future__ import annotations

import logging
import shutil
from typing import TYPE_CHECKING, Any

from alembic import command
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy import inspect

from shipctl.infrastructure.database.migrations import migration_config
from shipctl.services._helpers import now_compact
from shipctl.services.base import BaseService
from shipctl.services.result import ErrorCode, ServiceResult

if TYPE_CHECKING:
    from pathlib import Path

    from alembic.config import Config

logger = logging.getLogger(__name__)

BACKUP_KEEP = 5


class UpgradeService(BaseService):
    """Handles database schema migrations via Alembic."""

    def _alembic_config(self) -> Config:
        return migration_config(
            self._store.db_path, busy_timeout=self._store.settings.database.busy_timeout
        )

    def _tables_exist(self) -> bool:
        """True for databases created before version tracking was added."""
        return "shipments" in inspect(self._store.engine).get_table_names()

    def check_pending(self) -> ServiceResult:
        """List pending migrations without applying."""
        op = "upgrade"
        try:
            cfg = self._alembic_config()
            script = ScriptDirectory.from_config(cfg)
            head = script.get_current_head()

            with self._store.engine.connect() as conn:
                current = MigrationContext.configure(conn).get_current_revision()

            pending: list[dict[str, Any]] = []
            if current != head and head is not None:
                rev = script.get_revision(head)
                while rev is not None and rev.revision != current:
                    pending.append({"revision": rev.revision, "description": rev.doc or ""})
                    if rev.down_revision is None:
                        break
                    rev = script.get_revision(str(rev.down_revision))
        except Exception as exc:
            return ServiceResult.failure(
                op, ErrorCode.CHECK_FAILED, f"Failed to check migrations: {exc}"
            )

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "pending_count": len(pending),
                "pending": pending,
                "current": current,
                "head": head,
            },
        )

    def apply(self) -> ServiceResult:
        """Back up the database, then upgrade (or stamp) to head."""
        op = "upgrade"
        check = self.check_pending()
        if not check.ok:
            return check

        pending_count = check.data["pending_count"]
        if pending_count == 0:
            return ServiceResult(
                ok=True,
                op=op,
                data={
                    "applied_count": 0,
                    "current": check.data["head"],
                    "message": "Database is already up to date",
                },
            )

        try:
            backup_path = self._backup_db()
        except OSError as exc:
            return ServiceResult.failure(op, ErrorCode.BACKUP_FAILED, f"Backup failed: {exc}")

        try:
            cfg = self._alembic_config()
            if check.data["current"] is None and self._tables_exist():
                # Tables created by create_all without a version row.
                command.stamp(cfg, "head")
            else:
                command.upgrade(cfg, "head")
        except Exception as exc:
            return ServiceResult.failure(
                op,
                ErrorCode.MIGRATION_FAILED,
                f"Migration failed: {exc}. Backup at: {backup_path}",
                backup_path=str(backup_path),
            )

        logger.info("Applied %d migration(s); backup at %s", pending_count, backup_path)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "applied_count": pending_count,
                "current": check.data["head"],
                "backup_path": str(backup_path),
            },
        )

    def stamp_current(self) -> ServiceResult:
        """Stamp the database as at head (for freshly created databases)."""
        op = "upgrade"
        try:
            cfg = self._alembic_config()
            command.stamp(cfg, "head")
            head = ScriptDirectory.from_config(cfg).get_current_head()
        except Exception as exc:
            return ServiceResult.failure(
                op, ErrorCode.STAMP_FAILED, f"Failed to stamp database: {exc}"
            )
        return ServiceResult(ok=True, op=op, data={"stamped": True, "current": head})

    def _backup_db(self) -> Path:
        """Copy the database to ``backups/`` beside it, keeping the newest few."""
        db_path = self._store.db_path
        backup_dir = db_path.parent / "backups"
        backup_dir.mkdir(parents=True, exist_ok=True)

        # Fold the WAL into the main file so the copy is complete.
        raw = self._store.engine.raw_connection()
        try:
            raw.driver_connection.execute("PRAGMA wal_checkpoint(TRUNCATE)")
        finally:
            raw.close()

        backup_path = backup_dir / f"{db_path.stem}-{now_compact()}.db"
        shutil.copy2(str(db_path), str(backup_path))

        backups = sorted(backup_dir.glob(f"{db_path.stem}-*.db"))
        for old in backups[: max(0, len(backups) - BACKUP_KEEP)]:
            old.unlink(missing_ok=True)
        return backup_path
