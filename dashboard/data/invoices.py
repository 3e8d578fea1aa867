# dashboard/data/invoices.py
"""
Invoice reads for the dashboard: latest invoices, the searchable invoice
table and the edit form lookup.
"""

import logging
import math
from decimal import Decimal
from typing import List, Optional, Union
from uuid import UUID

from sqlalchemy import String, cast, func, or_, select
from sqlalchemy.ext.asyncio import AsyncEngine

from dashboard.db.schema import customers, invoices
from dashboard.errors import QUERY_FAILURES, DataFetchError
from dashboard.models.invoices import InvoiceForm, InvoiceTableRow, LatestInvoice
from dashboard.utils import format_currency

logger = logging.getLogger(__name__)

ITEMS_PER_PAGE = 6
LATEST_INVOICES_LIMIT = 5


def invoice_search_filter(query: str):
    """
    Case-insensitive substring match used by both the table and its page count.
    """
    return or_(
        customers.c.name.icontains(query, autoescape=True),
        customers.c.email.icontains(query, autoescape=True),
        cast(invoices.c.amount, String).icontains(query, autoescape=True),
        cast(invoices.c.date, String).icontains(query, autoescape=True),
        invoices.c.status.icontains(query, autoescape=True),
    )


def page_offset(current_page: int) -> int:
    # Pages are 1-indexed; anything below 1 reads the first page.
    return (max(current_page, 1) - 1) * ITEMS_PER_PAGE


async def fetch_latest_invoices(engine: AsyncEngine) -> List[LatestInvoice]:
    stmt = (
        select(
            invoices.c.amount,
            customers.c.name,
            customers.c.image_url,
            customers.c.email,
            invoices.c.id,
        )
        .select_from(invoices.join(customers))
        .order_by(invoices.c.date.desc())
        .limit(LATEST_INVOICES_LIMIT)
    )

    try:
        async with engine.connect() as conn:
            rows = (await conn.execute(stmt)).mappings().all()
    except QUERY_FAILURES:
        logger.exception("Database error while fetching the latest invoices")
        raise DataFetchError("Failed to fetch the latest invoices.") from None

    return [
        LatestInvoice(
            id=row["id"],
            name=row["name"],
            image_url=row["image_url"],
            email=row["email"],
            amount=format_currency(row["amount"]),
        )
        for row in rows
    ]


async def fetch_filtered_invoices(
    engine: AsyncEngine,
    query: str,
    current_page: int,
) -> List[InvoiceTableRow]:
    """
    One page (ITEMS_PER_PAGE rows) of invoices matching `query`, newest first.
    """
    stmt = (
        select(
            invoices.c.id,
            invoices.c.amount,
            invoices.c.date,
            invoices.c.status,
            customers.c.name,
            customers.c.email,
            customers.c.image_url,
        )
        .select_from(invoices.join(customers))
        .where(invoice_search_filter(query))
        .order_by(invoices.c.date.desc())
        .limit(ITEMS_PER_PAGE)
        .offset(page_offset(current_page))
    )

    try:
        async with engine.connect() as conn:
            rows = (await conn.execute(stmt)).mappings().all()
    except QUERY_FAILURES:
        logger.exception(
            "Database error while fetching invoices (query=%r, page=%s)",
            query,
            current_page,
        )
        raise DataFetchError("Failed to fetch invoices.") from None

    return [InvoiceTableRow.model_validate(dict(row)) for row in rows]


async def fetch_invoices_pages(engine: AsyncEngine, query: str) -> int:
    stmt = (
        select(func.count())
        .select_from(invoices.join(customers))
        .where(invoice_search_filter(query))
    )

    try:
        async with engine.connect() as conn:
            total = (await conn.execute(stmt)).scalar_one()
    except QUERY_FAILURES:
        logger.exception(
            "Database error while counting invoices (query=%r)", query
        )
        raise DataFetchError("Failed to fetch total number of invoices.") from None

    return math.ceil((total or 0) / ITEMS_PER_PAGE)


async def fetch_invoice_by_id(
    engine: AsyncEngine,
    invoice_id: Union[str, UUID],
) -> Optional[InvoiceForm]:
    """
    Look up a single invoice for the edit form.

    The amount comes back in dollars (Decimal) rather than formatted, since the
    form edits it. Returns None when no invoice has this id.
    """
    try:
        key = invoice_id if isinstance(invoice_id, UUID) else UUID(str(invoice_id))
    except ValueError:
        logger.debug("Not an invoice id: %r", invoice_id)
        return None

    stmt = select(
        invoices.c.id,
        invoices.c.customer_id,
        invoices.c.amount,
        invoices.c.status,
    ).where(invoices.c.id == key)

    try:
        async with engine.connect() as conn:
            row = (await conn.execute(stmt)).mappings().first()
    except QUERY_FAILURES:
        logger.exception("Database error while fetching invoice %s", key)
        raise DataFetchError("Failed to fetch invoice.") from None

    if row is None:
        return None

    return InvoiceForm(
        id=row["id"],
        customer_id=row["customer_id"],
        # cents -> dollars
        amount=Decimal(row["amount"]) / 100,
        status=row["status"],
    )
