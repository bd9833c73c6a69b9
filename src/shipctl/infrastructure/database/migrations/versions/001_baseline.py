"""Baseline schema: directory tables, shipments, pricing configs.

Revision ID: 001_baseline
Revises: None
Create Date: 2026-09-14

Databases created by ``shipctl init`` are stamped at this revision
without running it. Money and weight columns are INTEGER hundredths.
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision: str = "001_baseline"
down_revision: str | None = None
branch_labels: tuple[str, ...] | None = None
depends_on: tuple[str, ...] | None = None


def upgrade() -> None:
    op.create_table(
        "companies",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("registration_number", sa.Text, nullable=False, unique=True),
        sa.Column("address", sa.Text, nullable=False),
        sa.Column("phone", sa.Text),
        sa.Column("email", sa.Text),
        sa.Column("created_at", sa.Text, nullable=False),
        sa.Column("updated_at", sa.Text),
    )

    op.create_table(
        "offices",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("company_id", sa.Integer, sa.ForeignKey("companies.id"), nullable=False),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("address", sa.Text, nullable=False),
        sa.Column("city", sa.Text, nullable=False),
        sa.Column("country", sa.Text, nullable=False),
        sa.Column("phone", sa.Text),
        sa.Column("created_at", sa.Text, nullable=False),
        sa.Column("updated_at", sa.Text),
    )

    op.create_table(
        "customers",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("email", sa.Text),
        sa.Column("phone", sa.Text),
        sa.Column("address", sa.Text),
        sa.Column("created_at", sa.Text, nullable=False),
        sa.Column("updated_at", sa.Text),
    )

    op.create_table(
        "employees",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("company_id", sa.Integer, sa.ForeignKey("companies.id"), nullable=False),
        sa.Column("office_id", sa.Integer, sa.ForeignKey("offices.id")),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("employee_type", sa.Text, nullable=False),
        sa.Column("hire_date", sa.Text, nullable=False),
        sa.Column("salary", sa.Integer, nullable=False),
        sa.Column("created_at", sa.Text, nullable=False),
        sa.Column("updated_at", sa.Text),
    )

    op.create_table(
        "shipments",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("sender_id", sa.Integer, sa.ForeignKey("customers.id"), nullable=False),
        sa.Column("recipient_id", sa.Integer, sa.ForeignKey("customers.id"), nullable=False),
        sa.Column(
            "registered_by_id", sa.Integer, sa.ForeignKey("employees.id"), nullable=False
        ),
        sa.Column("origin_office_id", sa.Integer, sa.ForeignKey("offices.id")),
        sa.Column("delivery_address", sa.Text),
        sa.Column("delivery_office_id", sa.Integer, sa.ForeignKey("offices.id")),
        sa.Column("weight", sa.Integer, nullable=False),
        sa.Column("price", sa.Integer, nullable=False),
        sa.Column("status", sa.Text, nullable=False),
        sa.Column("registered_at", sa.Text, nullable=False),
        sa.Column("delivered_at", sa.Text),
        sa.Column("updated_at", sa.Text, nullable=False),
        sa.CheckConstraint(
            "(delivery_address IS NULL) <> (delivery_office_id IS NULL)",
            name="ck_shipments_one_destination",
        ),
        sa.CheckConstraint(
            "(delivered_at IS NULL) = (status <> 'delivered')",
            name="ck_shipments_delivered_at",
        ),
    )
    op.create_index("ix_shipments_status", "shipments", ["status"])
    op.create_index("ix_shipments_sender", "shipments", ["sender_id"])
    op.create_index("ix_shipments_recipient", "shipments", ["recipient_id"])
    op.create_index("ix_shipments_registered_by", "shipments", ["registered_by_id"])
    op.create_index("ix_shipments_delivered_at", "shipments", ["delivered_at"])

    op.create_table(
        "pricing_configs",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("base_price", sa.Integer, nullable=False),
        sa.Column("price_per_kg", sa.Integer, nullable=False),
        sa.Column("address_delivery_fee", sa.Integer, nullable=False),
        sa.Column("active", sa.Boolean, nullable=False, server_default="1"),
        sa.Column("created_at", sa.Text, nullable=False),
        sa.Column("updated_at", sa.Text),
    )
    op.create_index(
        "uq_pricing_configs_active",
        "pricing_configs",
        ["active"],
        unique=True,
        sqlite_where=sa.text("active = 1"),
    )


def downgrade() -> None:
    op.drop_index("uq_pricing_configs_active", table_name="pricing_configs")
    op.drop_table("pricing_configs")
    for name in (
        "ix_shipments_delivered_at",
        "ix_shipments_registered_by",
        "ix_shipments_recipient",
        "ix_shipments_sender",
        "ix_shipments_status",
    ):
        op.drop_index(name, table_name="shipments")
    op.drop_table("shipments")
    op.drop_table("employees")
    op.drop_table("customers")
    op.drop_table("offices")
    op.drop_table("companies")
