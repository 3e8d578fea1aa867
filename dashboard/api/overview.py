# dashboard/api/overview.py

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncEngine

from dashboard.data.overview import fetch_card_data, fetch_revenue
from dashboard.db.engine import get_engine
from dashboard.models.overview import CardData, Revenue

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/revenue", response_model=List[Revenue])
async def revenue_chart(engine: AsyncEngine = Depends(get_engine)) -> List[Revenue]:
    return await fetch_revenue(engine)


@router.get("/cards", response_model=CardData)
async def summary_cards(engine: AsyncEngine = Depends(get_engine)) -> CardData:
    """
    Totals shown in the dashboard's summary cards.
    """
    return await fetch_card_data(engine)
