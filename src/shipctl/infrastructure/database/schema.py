"""SQLAlchemy Core table definitions for the shipctl database.

Directory tables (companies, offices, customers, employees) are owned by
the back-office CRUD layer; shipctl only reads them. ``shipments`` and
``pricing_configs`` are written exclusively by the service layer.

Relationships are one-directional foreign keys. Nothing is loaded as a
child collection; lookups go through explicit queries.
"""

from __future__ import annotations

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Table,
    Text,
    text,
)

from shipctl.infrastructure.database.types import Hundredths

metadata = MetaData()

# ---------------------------------------------------------------------------
# Directory (read-only to shipctl)
# ---------------------------------------------------------------------------

companies = Table(
    "companies",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", Text, nullable=False),
    Column("registration_number", Text, nullable=False, unique=True),
    Column("address", Text, nullable=False),
    Column("phone", Text),
    Column("email", Text),
    Column("created_at", Text, nullable=False),
    Column("updated_at", Text),
)

offices = Table(
    "offices",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("company_id", Integer, ForeignKey("companies.id"), nullable=False),
    Column("name", Text, nullable=False),
    Column("address", Text, nullable=False),
    Column("city", Text, nullable=False),
    Column("country", Text, nullable=False),
    Column("phone", Text),
    Column("created_at", Text, nullable=False),
    Column("updated_at", Text),
)

customers = Table(
    "customers",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", Text, nullable=False),
    Column("email", Text),
    Column("phone", Text),
    Column("address", Text),
    Column("created_at", Text, nullable=False),
    Column("updated_at", Text),
)

employees = Table(
    "employees",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("company_id", Integer, ForeignKey("companies.id"), nullable=False),
    Column("office_id", Integer, ForeignKey("offices.id")),  # couriers have none
    Column("name", Text, nullable=False),
    Column("employee_type", Text, nullable=False),  # courier | office_staff
    Column("hire_date", Text, nullable=False),
    Column("salary", Hundredths, nullable=False),
    Column("created_at", Text, nullable=False),
    Column("updated_at", Text),
)

# ---------------------------------------------------------------------------
# Core tables
# ---------------------------------------------------------------------------

shipments = Table(
    "shipments",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("sender_id", Integer, ForeignKey("customers.id"), nullable=False),
    Column("recipient_id", Integer, ForeignKey("customers.id"), nullable=False),
    Column("registered_by_id", Integer, ForeignKey("employees.id"), nullable=False),
    Column("origin_office_id", Integer, ForeignKey("offices.id")),
    Column("delivery_address", Text),
    Column("delivery_office_id", Integer, ForeignKey("offices.id")),
    Column("weight", Hundredths, nullable=False),
    Column("price", Hundredths, nullable=False),
    Column("status", Text, nullable=False),
    Column("registered_at", Text, nullable=False),
    Column("delivered_at", Text),
    Column("updated_at", Text, nullable=False),
    CheckConstraint(
        "(delivery_address IS NULL) <> (delivery_office_id IS NULL)",
        name="ck_shipments_one_destination",
    ),
    CheckConstraint(
        "(delivered_at IS NULL) = (status <> 'delivered')",
        name="ck_shipments_delivered_at",
    ),
)

pricing_configs = Table(
    "pricing_configs",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("base_price", Hundredths, nullable=False),
    Column("price_per_kg", Hundredths, nullable=False),
    Column("address_delivery_fee", Hundredths, nullable=False),
    Column("active", Boolean, nullable=False, default=True, server_default="1"),
    Column("created_at", Text, nullable=False),
    Column("updated_at", Text),
)

# ---------------------------------------------------------------------------
# Indexes for frequently filtered columns
# ---------------------------------------------------------------------------

Index("ix_shipments_status", shipments.c.status)
Index("ix_shipments_sender", shipments.c.sender_id)
Index("ix_shipments_recipient", shipments.c.recipient_id)
Index("ix_shipments_registered_by", shipments.c.registered_by_id)
Index("ix_shipments_delivered_at", shipments.c.delivered_at)

# At most one active pricing row, enforced by the database.
Index(
    "uq_pricing_configs_active",
    pricing_configs.c.active,
    unique=True,
    sqlite_where=text("active = 1"),
)
