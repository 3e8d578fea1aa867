# scripts/seed.py

import asyncio
import csv
import logging
import os
from datetime import datetime
from uuid import UUID

from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncEngine

from dashboard.db.engine import get_engine
from dashboard.db.schema import customers, invoices, revenue

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)

DATA_DIR = "data"
CUSTOMERS_FILE = os.path.join(DATA_DIR, "customers.csv")
INVOICES_FILE = os.path.join(DATA_DIR, "invoices.csv")
REVENUE_FILE = os.path.join(DATA_DIR, "revenue.csv")

INVOICE_STATUSES = {"paid", "pending"}


# ---- Helpers ----

def parse_cents(value: str) -> int:
    value = value.strip()
    if not value:
        raise ValueError("amount is empty")
    cents = int(value)
    if cents < 0:
        raise ValueError(f"amount must be >= 0, got {cents}")
    return cents


def parse_status(value: str) -> str:
    status = value.strip().lower()
    if status not in INVOICE_STATUSES:
        raise ValueError(f"unknown status {value!r}")
    return status


def parse_date(value: str):
    return datetime.strptime(value.strip(), "%Y-%m-%d").date()


def _read_csv(file_path: str, parse_row):
    """
    Run parse_row over every CSV row, collecting records and a small error report.
    """
    records = []
    n_rows = 0
    n_errors = 0
    error_examples = []

    with open(file_path, newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)

        for row in reader:
            n_rows += 1
            try:
                records.append(parse_row(row))
            except (KeyError, ValueError) as e:
                n_errors += 1
                if len(error_examples) < 5:
                    error_examples.append(
                        {
                            "row_number": n_rows,
                            "row": dict(row),
                            "error": repr(e),
                        }
                    )

    stats = {
        "n_rows": n_rows,
        "n_records": len(records),
        "n_errors": n_errors,
        "error_examples": error_examples,
    }
    return records, stats


def parse_customers_csv(file_path: str = CUSTOMERS_FILE):
    def parse_row(row):
        return {
            "id": UUID(row["id"].strip()),
            "name": row["name"].strip(),
            "email": row["email"].strip(),
            "image_url": row["image_url"].strip(),
        }

    return _read_csv(file_path, parse_row)


def parse_invoices_csv(file_path: str = INVOICES_FILE, customer_ids=None):
    """
    Parse invoices; when customer_ids is given, rows pointing at any other
    customer are reported as errors instead of failing the load on the FK.
    """
    def parse_row(row):
        customer_id = UUID(row["customer_id"].strip())
        if customer_ids is not None and customer_id not in customer_ids:
            raise ValueError(f"unknown customer {customer_id}")
        return {
            "id": UUID(row["id"].strip()),
            "customer_id": customer_id,
            "amount": parse_cents(row["amount"]),
            "status": parse_status(row["status"]),
            "date": parse_date(row["date"]),
        }

    return _read_csv(file_path, parse_row)


def parse_revenue_csv(file_path: str = REVENUE_FILE):
    def parse_row(row):
        return {
            "month": row["month"].strip(),
            "revenue": int(row["revenue"].strip()),
        }

    return _read_csv(file_path, parse_row)


def upsert(dialect_name: str, table, row: dict, key: str):
    """
    Build an INSERT that updates the existing row on a `key` conflict, so
    seeding twice leaves the same data behind.
    """
    insert = postgresql_insert if dialect_name == "postgresql" else sqlite_insert
    stmt = insert(table).values(**row)

    update_cols = {
        name: stmt.excluded[name]
        for name in row
        if name != key
    }

    return stmt.on_conflict_do_update(
        index_elements=[table.c[key]],
        set_=update_cols,
    )


async def load_into_db(engine: AsyncEngine, customers_list, invoices_list, revenue_list):
    dialect_name = engine.dialect.name

    async with engine.begin() as conn:
        # Customers first: invoices reference them
        for c in customers_list:
            await conn.execute(upsert(dialect_name, customers, c, "id"))

        for inv in invoices_list:
            await conn.execute(upsert(dialect_name, invoices, inv, "id"))

        for r in revenue_list:
            await conn.execute(upsert(dialect_name, revenue, r, "month"))


def _log_stats(label: str, stats: dict) -> None:
    logger.info("%s rows read: %s", label, stats["n_rows"])
    logger.info("%s loaded:    %s", label, stats["n_records"])
    logger.info("%s errors:    %s", label, stats["n_errors"])
    for ex in stats["error_examples"]:
        logger.warning("%s row %s: %s", label, ex["row_number"], ex["error"])


async def seed(engine: AsyncEngine) -> dict:
    customers_list, customer_stats = parse_customers_csv(CUSTOMERS_FILE)
    invoices_list, invoice_stats = parse_invoices_csv(
        INVOICES_FILE,
        customer_ids={c["id"] for c in customers_list},
    )
    revenue_list, revenue_stats = parse_revenue_csv(REVENUE_FILE)

    await load_into_db(engine, customers_list, invoices_list, revenue_list)

    stats = {
        "customers": customer_stats,
        "invoices": invoice_stats,
        "revenue": revenue_stats,
    }
    for label, file_stats in stats.items():
        _log_stats(label, file_stats)
    return stats


async def _main():
    engine = get_engine()
    try:
        await seed(engine)
    finally:
        await engine.dispose()


def main():
    asyncio.run(_main())


if __name__ == "__main__":
    main()
