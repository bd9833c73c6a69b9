"""Repositories: SQL encapsulated per table group, bound to one connection."""

from shipctl.infrastructure.repositories.directory import DirectoryRepository
from shipctl.infrastructure.repositories.pricing import PricingRepository
from shipctl.infrastructure.repositories.shipments import ShipmentRepository

__all__ = ["DirectoryRepository", "PricingRepository", "ShipmentRepository"]
