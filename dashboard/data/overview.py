# dashboard/data/overview.py
"""
Reads behind the dashboard overview page: the revenue chart and the
summary cards.
"""

import asyncio
import logging
from typing import List

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncEngine

from dashboard.db.schema import customers, invoices, revenue
from dashboard.errors import QUERY_FAILURES, DataFetchError
from dashboard.models.overview import CardData, Revenue
from dashboard.utils import format_currency

logger = logging.getLogger(__name__)


async def fetch_revenue(engine: AsyncEngine) -> List[Revenue]:
    """
    Every monthly revenue row, in table order.
    """
    stmt = select(revenue.c.month, revenue.c.revenue)

    try:
        async with engine.connect() as conn:
            rows = (await conn.execute(stmt)).mappings().all()
    except QUERY_FAILURES:
        logger.exception("Database error while fetching revenue data")
        raise DataFetchError("Failed to fetch revenue data.") from None

    return [Revenue(month=row["month"], revenue=row["revenue"]) for row in rows]


async def _first_row(engine: AsyncEngine, stmt):
    async with engine.connect() as conn:
        return (await conn.execute(stmt)).mappings().one()


async def fetch_card_data(engine: AsyncEngine) -> CardData:
    """
    Invoice count, customer count and paid/pending totals for the summary cards.

    The three aggregates are independent and run concurrently, each on its own
    connection. If any of them fails the whole call fails.
    """
    invoice_count_stmt = select(func.count().label("count")).select_from(invoices)
    customer_count_stmt = select(func.count().label("count")).select_from(customers)
    invoice_status_stmt = select(
        func.sum(
            case((invoices.c.status == "paid", invoices.c.amount), else_=0)
        ).label("paid"),
        func.sum(
            case((invoices.c.status == "pending", invoices.c.amount), else_=0)
        ).label("pending"),
    )

    try:
        invoice_count, customer_count, invoice_status = await asyncio.gather(
            _first_row(engine, invoice_count_stmt),
            _first_row(engine, customer_count_stmt),
            _first_row(engine, invoice_status_stmt),
        )
    except QUERY_FAILURES:
        logger.exception("Database error while fetching card data")
        raise DataFetchError("Failed to fetch card data.") from None

    # SUM over no rows is NULL
    return CardData(
        number_of_invoices=int(invoice_count["count"] or 0),
        number_of_customers=int(customer_count["count"] or 0),
        total_paid_invoices=format_currency(invoice_status["paid"] or "0"),
        total_pending_invoices=format_currency(invoice_status["pending"] or "0"),
    )
