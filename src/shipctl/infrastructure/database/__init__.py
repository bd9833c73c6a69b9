"""SQLite database engine, schema, and column types via SQLAlchemy Core."""

from shipctl.infrastructure.database.engine import create_db_engine, init_database
from shipctl.infrastructure.database.schema import (
    companies,
    customers,
    employees,
    metadata,
    offices,
    pricing_configs,
    shipments,
)
from shipctl.infrastructure.database.types import Hundredths

__all__ = [
    "Hundredths",
    "companies",
    "create_db_engine",
    "customers",
    "employees",
    "init_database",
    "metadata",
    "offices",
    "pricing_configs",
    "shipments",
]
