# dashboard/api/invoices.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncEngine

from dashboard.data.invoices import (
    fetch_filtered_invoices,
    fetch_invoice_by_id,
    fetch_invoices_pages,
    fetch_latest_invoices,
)
from dashboard.db.engine import get_engine
from dashboard.models.invoices import (
    InvoiceForm,
    InvoicePageOut,
    InvoicePagesOut,
    LatestInvoice,
)
from dashboard.utils import generate_pagination

router = APIRouter(prefix="/invoices", tags=["invoices"])


@router.get("", response_model=InvoicePageOut)
async def list_invoices(
    query: str = Query("", description="Case-insensitive text to search for"),
    page: int = Query(1, ge=1, description="1-indexed page number"),
    engine: AsyncEngine = Depends(get_engine),
) -> InvoicePageOut:
    """
    One page of the invoices table plus what is needed to render its pagination.
    """
    items = await fetch_filtered_invoices(engine, query, page)
    total_pages = await fetch_invoices_pages(engine, query)

    return InvoicePageOut(
        items=items,
        page=page,
        total_pages=total_pages,
        pagination=generate_pagination(page, total_pages),
    )


@router.get("/latest", response_model=List[LatestInvoice])
async def latest_invoices(engine: AsyncEngine = Depends(get_engine)) -> List[LatestInvoice]:
    return await fetch_latest_invoices(engine)


@router.get("/pages", response_model=InvoicePagesOut)
async def invoice_pages(
    query: str = Query("", description="Case-insensitive text to search for"),
    engine: AsyncEngine = Depends(get_engine),
) -> InvoicePagesOut:
    return InvoicePagesOut(total_pages=await fetch_invoices_pages(engine, query))


@router.get("/{invoice_id}", response_model=InvoiceForm)
async def get_invoice(
    invoice_id: str,
    engine: AsyncEngine = Depends(get_engine),
) -> InvoiceForm:
    """
    Look up a single invoice by id, amount in dollars.
    """
    invoice = await fetch_invoice_by_id(engine, invoice_id)

    if invoice is None:
        raise HTTPException(status_code=404, detail="Invoice not found")

    return invoice
