# dashboard/api/customers.py

from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncEngine

from dashboard.data.customers import fetch_customers, fetch_filtered_customers
from dashboard.db.engine import get_engine
from dashboard.models.customers import CustomerField, CustomerTableRow

router = APIRouter(prefix="/customers", tags=["customers"])


@router.get("", response_model=List[CustomerField])
async def list_customers(engine: AsyncEngine = Depends(get_engine)) -> List[CustomerField]:
    """
    Return every customer's id and name, ordered by name.
    """
    return await fetch_customers(engine)


@router.get("/table", response_model=List[CustomerTableRow])
async def customers_table(
    query: str = Query("", description="Matched against name or email, case-insensitive"),
    engine: AsyncEngine = Depends(get_engine),
) -> List[CustomerTableRow]:
    return await fetch_filtered_customers(engine, query)
