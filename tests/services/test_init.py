"""Tests for InitService."""

from __future__ import annotations

from decimal import Decimal

from shipctl.infrastructure.store import Store
from shipctl.services.init import InitService
from shipctl.services.pricing import PricingService
from shipctl.services.upgrade import UpgradeService


class TestInitProject:
    def test_stamps_and_seeds(self, store: Store) -> None:
        result = InitService(store).init_project()
        assert result.ok
        assert result.data["revision"] == "001_baseline"
        assert result.data["pricing_seeded"] is True
        assert result.data["db_path"] == str(store.db_path)
        assert UpgradeService(store).check_pending().data["pending_count"] == 0
        active = PricingService(store).get_active_config()
        assert active.data["base_price"] == Decimal("5.00")

    def test_without_seed(self, store: Store) -> None:
        result = InitService(store).init_project(seed_pricing=False)
        assert result.data["pricing_seeded"] is False
        assert not PricingService(store).get_active_config().ok

    def test_rerun_is_harmless(self, store: Store) -> None:
        svc = InitService(store)
        assert svc.init_project().ok
        again = svc.init_project()
        assert again.ok
        assert again.data["pricing_seeded"] is False
        assert PricingService(store).config_history().data["count"] == 1
