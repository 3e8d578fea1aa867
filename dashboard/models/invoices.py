# dashboard/models/invoices.py

import datetime
from decimal import Decimal
from typing import Annotated, List, Literal, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, PlainSerializer

InvoiceStatus = Literal["pending", "paid"]


class LatestInvoice(BaseModel):
    id: UUID
    name: str
    image_url: str
    email: str
    amount: str

    model_config = ConfigDict(from_attributes=True)


class InvoiceTableRow(BaseModel):
    id: UUID
    amount: int
    date: datetime.date
    status: InvoiceStatus
    name: str
    email: str
    image_url: str

    model_config = ConfigDict(from_attributes=True)


class InvoiceForm(BaseModel):
    id: UUID
    customer_id: UUID
    amount: Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]
    status: InvoiceStatus

    model_config = ConfigDict(from_attributes=True)


class InvoicePageOut(BaseModel):
    items: List[InvoiceTableRow]
    page: int
    total_pages: int
    pagination: List[Union[int, str]]


class InvoicePagesOut(BaseModel):
    total_pages: int
