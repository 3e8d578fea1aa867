from datetime import date
from uuid import UUID

import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from dashboard.db.schema import customers, invoices, metadata, revenue

AMY = UUID("cc27c14a-0acf-4f4a-a6c9-d45682c144b9")
DELBA = UUID("3958dc9e-712f-4377-85e9-fec4b6a6442a")
LEE = UUID("3958dc9e-742f-4377-85e9-fec4b6a6442a")
ZED = UUID("5f0c9a51-3d0e-4a7e-9c3b-6f1b2d7e8a90")


def invoice_id(n: int) -> UUID:
    return UUID(f"00000000-0000-4000-8000-{n:012d}")


CUSTOMER_ROWS = [
    {"id": DELBA, "name": "Delba de Oliveira", "email": "delba@oliveira.com",
     "image_url": "/customers/delba-de-oliveira.png"},
    {"id": LEE, "name": "Lee Robinson", "email": "lee@robinson.com",
     "image_url": "/customers/lee-robinson.png"},
    {"id": AMY, "name": "Amy Burns", "email": "amy@burns.com",
     "image_url": "/customers/amy-burns.png"},
    # no invoices
    {"id": ZED, "name": "Zed Zero", "email": "zed@zero.com",
     "image_url": "/customers/zed-zero.png"},
]

INVOICE_ROWS = [
    {"id": invoice_id(1), "customer_id": DELBA, "amount": 123456, "status": "paid", "date": date(2023, 1, 10)},
    {"id": invoice_id(2), "customer_id": LEE, "amount": 3000, "status": "pending", "date": date(2023, 2, 11)},
    {"id": invoice_id(3), "customer_id": AMY, "amount": 5000, "status": "paid", "date": date(2023, 3, 12)},
    {"id": invoice_id(4), "customer_id": DELBA, "amount": 700, "status": "pending", "date": date(2023, 4, 13)},
    {"id": invoice_id(5), "customer_id": LEE, "amount": 2500, "status": "paid", "date": date(2023, 5, 14)},
    {"id": invoice_id(6), "customer_id": AMY, "amount": 999, "status": "pending", "date": date(2023, 6, 15)},
    {"id": invoice_id(7), "customer_id": DELBA, "amount": 15000, "status": "paid", "date": date(2023, 7, 16)},
    {"id": invoice_id(8), "customer_id": LEE, "amount": 42, "status": "pending", "date": date(2023, 8, 17)},
]

REVENUE_ROWS = [
    {"month": "Jan", "revenue": 2000},
    {"month": "Feb", "revenue": 1800},
    {"month": "Mar", "revenue": 2200},
]


def _sqlite_engine(path):
    # NullPool: every checkout opens a fresh connection on the running loop
    return create_async_engine(f"sqlite+aiosqlite:///{path}", poolclass=NullPool)


@pytest_asyncio.fixture
async def empty_engine(tmp_path):
    """Schema only, no rows."""
    engine = _sqlite_engine(tmp_path / "dashboard_test.db")
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def engine(empty_engine):
    async with empty_engine.begin() as conn:
        await conn.execute(customers.insert(), CUSTOMER_ROWS)
        await conn.execute(invoices.insert(), INVOICE_ROWS)
        await conn.execute(revenue.insert(), REVENUE_ROWS)
    return empty_engine


@pytest_asyncio.fixture
async def broken_engine(tmp_path):
    """A database without any tables, so every query fails."""
    engine = _sqlite_engine(tmp_path / "no_schema.db")
    yield engine
    await engine.dispose()
