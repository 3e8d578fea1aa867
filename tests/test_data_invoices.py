from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from conftest import DELBA, invoice_id
from dashboard.data.invoices import (
    ITEMS_PER_PAGE,
    fetch_filtered_invoices,
    fetch_invoice_by_id,
    fetch_invoices_pages,
    fetch_latest_invoices,
)
from dashboard.db.schema import customers, invoices


@pytest.mark.asyncio
async def test_latest_invoices_are_newest_five_with_formatted_amounts(engine):
    latest = await fetch_latest_invoices(engine)

    assert [inv.id for inv in latest] == [invoice_id(n) for n in (8, 7, 6, 5, 4)]
    assert latest[0].name == "Lee Robinson"
    assert latest[0].email == "lee@robinson.com"
    assert latest[0].image_url == "/customers/lee-robinson.png"
    assert latest[0].amount == "$0.42"
    assert latest[1].amount == "$150.00"


@pytest.mark.asyncio
async def test_latest_invoices_on_empty_table(empty_engine):
    assert await fetch_latest_invoices(empty_engine) == []


@pytest.mark.asyncio
async def test_search_by_status_is_newest_first(engine):
    rows = await fetch_filtered_invoices(engine, "pending", 1)

    assert [r.id for r in rows] == [invoice_id(n) for n in (8, 6, 4, 2)]
    assert {r.status for r in rows} == {"pending"}


@pytest.mark.asyncio
async def test_search_is_case_insensitive_on_customer_name(engine):
    rows = await fetch_filtered_invoices(engine, "DELBA", 1)

    assert [r.id for r in rows] == [invoice_id(n) for n in (7, 4, 1)]
    assert rows[0].name == "Delba de Oliveira"


@pytest.mark.asyncio
async def test_search_matches_amount_and_date_as_text(engine):
    by_amount = await fetch_filtered_invoices(engine, "123", 1)
    assert [r.id for r in by_amount] == [invoice_id(1)]
    assert by_amount[0].amount == 123456

    by_date = await fetch_filtered_invoices(engine, "2023-03", 1)
    assert [r.id for r in by_date] == [invoice_id(3)]
    assert by_date[0].date == date(2023, 3, 12)


@pytest.mark.asyncio
async def test_search_matches_email(engine):
    rows = await fetch_filtered_invoices(engine, "@robinson", 1)
    assert len(rows) == 3


@pytest.mark.asyncio
async def test_search_treats_wildcards_literally(engine):
    assert await fetch_filtered_invoices(engine, "%", 1) == []
    assert await fetch_filtered_invoices(engine, "_", 1) == []
    assert await fetch_invoices_pages(engine, "%") == 0


@pytest.mark.asyncio
async def test_pages_split_at_six_rows(engine):
    first = await fetch_filtered_invoices(engine, "", 1)
    second = await fetch_filtered_invoices(engine, "", 2)
    third = await fetch_filtered_invoices(engine, "", 3)

    assert len(first) == ITEMS_PER_PAGE
    assert [r.id for r in first] == [invoice_id(n) for n in (8, 7, 6, 5, 4, 3)]
    assert [r.id for r in second] == [invoice_id(2), invoice_id(1)]
    assert third == []
    assert await fetch_invoices_pages(engine, "") == 2


@pytest.mark.asyncio
async def test_page_below_one_reads_first_page(engine):
    first = await fetch_filtered_invoices(engine, "", 1)

    assert await fetch_filtered_invoices(engine, "", 0) == first
    assert await fetch_filtered_invoices(engine, "", -3) == first


@pytest.mark.asyncio
@pytest.mark.parametrize("query", ["", "pending", "paid", "delba", "2023", "lee", "nothing"])
async def test_page_count_agrees_with_page_contents(engine, query):
    total_pages = await fetch_invoices_pages(engine, query)

    pages = [
        await fetch_filtered_invoices(engine, query, page)
        for page in range(1, total_pages + 1)
    ]
    seen = [row for rows in pages for row in rows]

    for page, rows in enumerate(pages, start=1):
        offset = (page - 1) * ITEMS_PER_PAGE
        assert len(rows) <= ITEMS_PER_PAGE
        assert total_pages * ITEMS_PER_PAGE >= len(rows)
        assert offset + len(rows) <= len(seen)

    # every match shows up exactly once across the pages
    assert len({r.id for r in seen}) == len(seen)
    assert total_pages == -(-len(seen) // ITEMS_PER_PAGE)
    assert await fetch_filtered_invoices(engine, query, total_pages + 1) == []


@pytest.mark.asyncio
async def test_invoice_by_id_converts_cents_to_dollars(engine):
    invoice = await fetch_invoice_by_id(engine, str(invoice_id(1)))

    assert invoice is not None
    assert invoice.id == invoice_id(1)
    assert invoice.customer_id == DELBA
    assert invoice.amount == Decimal("1234.56")
    assert invoice.status == "paid"


@pytest.mark.asyncio
async def test_invoice_by_id_accepts_uuid(engine):
    invoice = await fetch_invoice_by_id(engine, invoice_id(8))
    assert invoice.amount == Decimal("0.42")


@pytest.mark.asyncio
async def test_missing_invoice_is_none(engine):
    assert await fetch_invoice_by_id(engine, str(uuid4())) is None


@pytest.mark.asyncio
async def test_malformed_invoice_id_is_none(engine):
    assert await fetch_invoice_by_id(engine, "not-an-id") is None


@pytest.mark.asyncio
async def test_two_invoice_scenario(empty_engine):
    paid, pending = invoice_id(101), invoice_id(102)
    async with empty_engine.begin() as conn:
        await conn.execute(
            customers.insert(),
            [{"id": DELBA, "name": "Delba de Oliveira", "email": "delba@oliveira.com",
              "image_url": "/customers/delba-de-oliveira.png"}],
        )
        await conn.execute(
            invoices.insert(),
            [
                {"id": paid, "customer_id": DELBA, "amount": 5000, "status": "paid",
                 "date": date(2023, 1, 1)},
                {"id": pending, "customer_id": DELBA, "amount": 3000, "status": "pending",
                 "date": date(2023, 1, 2)},
            ],
        )

    ids = [r.id for r in await fetch_filtered_invoices(empty_engine, "pending", 1)]

    assert pending in ids
    assert paid not in ids
