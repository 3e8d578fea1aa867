# dashboard/data/customers.py

import logging
from typing import List

from sqlalchemy import case, func, or_, select
from sqlalchemy.ext.asyncio import AsyncEngine

from dashboard.db.schema import customers, invoices
from dashboard.errors import QUERY_FAILURES, DataFetchError
from dashboard.models.customers import CustomerField, CustomerTableRow
from dashboard.utils import format_currency

logger = logging.getLogger(__name__)


async def fetch_customers(engine: AsyncEngine) -> List[CustomerField]:
    """
    All customers (id and name only), alphabetically, for select inputs.
    """
    stmt = select(customers.c.id, customers.c.name).order_by(customers.c.name.asc())

    try:
        async with engine.connect() as conn:
            rows = (await conn.execute(stmt)).mappings().all()
    except QUERY_FAILURES:
        logger.exception("Database error while fetching all customers")
        raise DataFetchError("Failed to fetch all customers.") from None

    return [CustomerField(id=row["id"], name=row["name"]) for row in rows]


async def fetch_filtered_customers(engine: AsyncEngine, query: str) -> List[CustomerTableRow]:
    """
    Customers whose name or email contains `query`, with invoice totals.

    Customers without invoices are kept (outer join) and show zero totals.
    """
    stmt = (
        select(
            customers.c.id,
            customers.c.name,
            customers.c.email,
            customers.c.image_url,
            func.count(invoices.c.id).label("total_invoices"),
            func.sum(
                case((invoices.c.status == "pending", invoices.c.amount), else_=0)
            ).label("total_pending"),
            func.sum(
                case((invoices.c.status == "paid", invoices.c.amount), else_=0)
            ).label("total_paid"),
        )
        .select_from(customers.outerjoin(invoices))
        .where(
            or_(
                customers.c.name.icontains(query, autoescape=True),
                customers.c.email.icontains(query, autoescape=True),
            )
        )
        .group_by(
            customers.c.id,
            customers.c.name,
            customers.c.email,
            customers.c.image_url,
        )
        .order_by(customers.c.name.asc())
    )

    try:
        async with engine.connect() as conn:
            rows = (await conn.execute(stmt)).mappings().all()
    except QUERY_FAILURES:
        logger.exception("Database error while fetching customer table (query=%r)", query)
        raise DataFetchError("Failed to fetch customer table.") from None

    return [
        CustomerTableRow(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            image_url=row["image_url"],
            total_invoices=row["total_invoices"],
            total_pending=format_currency(row["total_pending"]),
            total_paid=format_currency(row["total_paid"]),
        )
        for row in rows
    ]
