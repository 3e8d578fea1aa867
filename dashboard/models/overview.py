# dashboard/models/overview.py

from pydantic import BaseModel, ConfigDict


class Revenue(BaseModel):
    month: str
    revenue: int

    model_config = ConfigDict(from_attributes=True)


class CardData(BaseModel):
    number_of_invoices: int
    number_of_customers: int
    total_paid_invoices: str
    total_pending_invoices: str
