# dashboard/models/customers.py

from uuid import UUID

from pydantic import BaseModel, ConfigDict


class CustomerField(BaseModel):
    id: UUID
    name: str

    model_config = ConfigDict(from_attributes=True)


class CustomerTableRow(BaseModel):
    id: UUID
    name: str
    email: str
    image_url: str
    total_invoices: int
    total_pending: str
    total_paid: str
