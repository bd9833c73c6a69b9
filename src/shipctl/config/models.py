"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here, shipctl.toml only contains
overrides. An empty file is a valid configuration.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field


class DatabaseConfig(BaseModel):
    """[database] section."""

    model_config = {"frozen": True}

    path: str = ".shipctl/shipctl.db"  # relative to the project root
    busy_timeout: float = Field(default=30.0, gt=0)
    echo: bool = False


class PricingSeedConfig(BaseModel):
    """[pricing] section, used only when seeding an empty database."""

    model_config = {"frozen": True}

    base_price: Decimal = Field(default=Decimal("5.00"), ge=0)
    price_per_kg: Decimal = Field(default=Decimal("2.00"), ge=0)
    address_delivery_fee: Decimal = Field(default=Decimal("10.00"), ge=0)
    seed_on_init: bool = True


class ReportsConfig(BaseModel):
    """[reports] section."""

    model_config = {"frozen": True}

    list_limit: int = Field(default=0, ge=0)  # 0 = unlimited


class ShipConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    pricing: PricingSeedConfig = Field(default_factory=PricingSeedConfig)
    reports: ReportsConfig = Field(default_factory=ReportsConfig)
