# dashboard/db/schema.py

from sqlalchemy import (
    MetaData, Table, Column, Integer, String,
    Date, ForeignKey, CheckConstraint, Text, Uuid
)

metadata = MetaData()

customers = Table(
    "customers",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("name", String(255), nullable=False),
    Column("email", String(255), nullable=False),
    Column("image_url", Text, nullable=False),
)

invoices = Table(
    "invoices",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("customer_id", Uuid, ForeignKey("customers.id"), nullable=False),
    Column("amount", Integer, nullable=False),
    Column("status", String(255), nullable=False),
    Column("date", Date, nullable=False),
    CheckConstraint("amount >= 0", name="ck_invoices_amount_nonneg"),
    CheckConstraint("status IN ('paid', 'pending')", name="ck_invoices_status"),
)

revenue = Table(
    "revenue",
    metadata,
    Column("month", String(4), primary_key=True),
    Column("revenue", Integer, nullable=False),
)
