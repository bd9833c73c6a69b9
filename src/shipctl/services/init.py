"""InitService: one-shot setup of a shipctl database."""

from __future__ import annotations

import logging

from shipctl.services.base import BaseService
from shipctl.services.pricing import PricingService
from shipctl.services.result import ServiceResult
from shipctl.services.upgrade import UpgradeService

logger = logging.getLogger(__name__)


class InitService(BaseService):
    """Creates tables, stamps the Alembic head and seeds pricing.

    Table creation already happened when the Store opened the engine;
    this records the schema version and the first pricing config.
    Re-running it is harmless.
    """

    def init_project(self, *, seed_pricing: bool = True) -> ServiceResult:
        op = "init_project"
        stamp = UpgradeService(self._store).stamp_current()
        if not stamp.ok:
            return stamp.model_copy(update={"op": op})

        seeded = False
        if seed_pricing:
            seed = PricingService(self._store).seed_default_config()
            if not seed.ok:
                return seed.model_copy(update={"op": op})
            seeded = bool(seed.data.get("seeded"))

        settings = self._store.settings
        logger.info("Initialized database at %s", self._store.db_path)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "db_path": str(self._store.db_path),
                "config_path": str(settings.config_path) if settings.config_path else None,
                "revision": stamp.data.get("current"),
                "pricing_seeded": seeded,
            },
        )
