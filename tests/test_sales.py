"""Invoice register, sales register, secondary sales book and analytics."""
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from app.models import Invoice, SalexBillingDetail, SalexInvoice, SalexItem


# 2024-04-01T00:00:00Z
APRIL_FIRST = 1711929600
DAY = 86400


def invoice(invoice_no, invoice_date, taxable, total, **extra):
    payload = {
        "invoice_no": invoice_no,
        "invoice_date": invoice_date,
        "total_taxable_value": taxable,
        "total": total,
        "invoiceItems": [{"product_id": 55, "qty": 1, "rate": taxable, "subtotal": taxable}],
    }
    payload.update(extra)
    return payload


@pytest.fixture
async def invoices(auth_client, seed):
    """Three invoices: two in April 2024 (fy 2024), one in May 2024 (fy 2025)."""
    payloads = [
        invoice(
            "1001", "2024-04-01", 1000, 1180,
            total_cgst=90, total_sgst=90, total_tax=180, fy=2024,
            select_customer=seed.customer_id,
            billingDetails={"user_name": "Kumar Motors", "gstin": "03AAAAA0000A1Z5"},
        ),
        invoice("1002", "2024-04-03", 500, 590, total_igst=90, total_tax=90, fy=2024, notes="counter sale"),
        invoice("1003", "2024-05-01", 100, 100, fy=2025),
    ]
    for payload in payloads:
        response = await auth_client.post("/api/v1/invoices", json=payload)
        assert response.status_code == 201, response.text
    return auth_client


# ==================== Invoice register ====================

async def test_invoice_register_rows(invoices):
    response = await invoices.get("/api/v1/invoices")

    assert response.status_code == 200
    body = response.json()
    assert body["pagination"]["total"] == 3
    assert body["pagination"]["limit"] == 50
    assert [row["invoice_no"] for row in body["invoices"]] == ["1003", "1002", "1001"]

    first = body["invoices"][2]
    assert first["customer_name"] == "Kumar Motors"
    assert first["customer_gstin"] == "03AAAAA0000A1Z5"
    assert first["item_count"] == 1
    assert first["formatted_date"] == "1/4/2024"
    assert first["formatted_total"] == "₹1,180.00"
    assert body["invoices"][1]["customer_name"] == "N/A"


@pytest.mark.parametrize("params, expected", [
    ({"search": "1002"}, ["1002"]),
    ({"search": "counter"}, ["1002"]),
    ({"fy": 2024}, ["1002", "1001"]),
    ({"start_date": "2024-04-02", "end_date": "2024-04-30"}, ["1002"]),
    ({"start_date": "2024-04-01", "end_date": "2024-04-01"}, ["1001"]),
    ({"start_date": str(APRIL_FIRST), "end_date": str(APRIL_FIRST + 3 * DAY)}, ["1002", "1001"]),
    # One bound alone does not filter
    ({"start_date": "2024-05-01"}, ["1003", "1002", "1001"]),
])
async def test_invoice_register_filters(invoices, params, expected):
    response = await invoices.get("/api/v1/invoices", params=params)
    assert [row["invoice_no"] for row in response.json()["invoices"]] == expected


async def test_invoice_register_rejects_bad_dates(invoices):
    response = await invoices.get(
        "/api/v1/invoices", params={"start_date": "yesterday", "end_date": "2024-04-30"}
    )
    assert response.status_code == 400


async def test_sales_register_defaults_to_25_rows(invoices):
    response = await invoices.get("/api/v1/sales")

    body = response.json()
    assert body["pagination"]["limit"] == 25
    assert len(body["sales"]) == 3
    assert body["sales"][0]["status"] == 1
    assert body["sales"][0]["type"] == "sale"


# ==================== Analytics ====================

async def test_custom_period_analytics(invoices):
    response = await invoices.get("/api/v1/sales/analytics", params={
        "period": "custom", "start_date": "2024-04-01", "end_date": "2024-04-30",
    })

    assert response.status_code == 200
    body = response.json()
    assert body["period"] == "custom"
    assert body["start_date"] == APRIL_FIRST
    assert body["end_date"] == APRIL_FIRST + 30 * DAY - 1
    assert body["summary"] == {
        "total_invoices": 2,
        "total_sales": 1770,
        "total_taxable_value": 1500,
        "total_tax": 270,
        "average_invoice_value": 885,
    }
    assert body["gst_breakdown"] == {"cgst": 90, "sgst": 90, "igst": 90}
    assert body["sales_trends"] == [
        {"sale_date": "2024-04-03", "total_sales": 590, "invoice_count": 1},
        {"sale_date": "2024-04-01", "total_sales": 1180, "invoice_count": 1},
    ]


async def test_trends_skip_rows_dated_outside_the_calendar(invoices, session_factory):
    # Epoch seconds past year 9999
    async with session_factory() as session:
        session.add(Invoice(
            invoice_no="LEGACY-1",
            invoice_date=10 ** 12,
            total_taxable_value=Decimal("100"),
            total=Decimal("100"),
        ))
        await session.commit()

    response = await invoices.get("/api/v1/sales/analytics", params={"period": "custom"})

    assert response.status_code == 200
    body = response.json()
    assert body["summary"]["total_invoices"] == 4
    assert [point["sale_date"] for point in body["sales_trends"]] == ["2024-05-01", "2024-04-03", "2024-04-01"]


async def test_custom_period_without_bounds_covers_everything(invoices):
    body = (await invoices.get("/api/v1/sales/analytics", params={"period": "custom"})).json()

    assert body["start_date"] is None
    assert body["summary"]["total_invoices"] == 3

    by_fy = (await invoices.get("/api/v1/sales/analytics", params={"period": "custom", "fy": 2025})).json()
    assert by_fy["summary"]["total_invoices"] == 1
    assert by_fy["summary"]["total_sales"] == 100


async def test_month_period_counts_only_this_month(auth_client, invoices):
    today = datetime.now(timezone.utc).date().isoformat()
    await auth_client.post("/api/v1/invoices", json=invoice("2001", today, 200, 236, total_tax=36))

    body = (await auth_client.get("/api/v1/sales/analytics")).json()

    assert body["period"] == "month"
    assert body["summary"]["total_invoices"] == 1
    assert body["summary"]["total_sales"] == 236
    assert body["sales_trends"] == [{"sale_date": today, "total_sales": 236, "invoice_count": 1}]


async def test_empty_analytics(auth_client):
    body = (await auth_client.get("/api/v1/sales/analytics", params={"period": "year"})).json()

    assert body["summary"]["total_invoices"] == 0
    assert body["summary"]["average_invoice_value"] == 0
    assert body["sales_trends"] == []


async def test_unknown_period_is_rejected(auth_client):
    response = await auth_client.get("/api/v1/sales/analytics", params={"period": "week"})
    assert response.status_code == 400


# ==================== Secondary sales book ====================

@pytest.fixture
async def salex(auth_client, session_factory):
    rows = [
        ("S-1", APRIL_FIRST, "118.00", 0),
        ("S-2", APRIL_FIRST + DAY, "590.00", 1),
        ("S-3", APRIL_FIRST + 2 * DAY, "2360.00", 2),
        ("S-4", APRIL_FIRST - DAY, "50.00", 7),
    ]
    async with session_factory() as session:
        for invoice_no, invoice_date, total, status in rows:
            header = SalexInvoice(
                invoice_no=invoice_no,
                invoice_date=invoice_date,
                total_taxable_value=Decimal(total),
                total=Decimal(total),
                status=status,
                fy=2024,
            )
            session.add(header)
            await session.flush()
            session.add(SalexItem(invoice_id=header.id, product_id=55, qty=1, rate=Decimal(total), subtotal=Decimal(total)))
            if invoice_no == "S-2":
                session.add(SalexBillingDetail(invoice_id=header.id, user_name="Walk-in", gstin="03XYZ"))
        await session.commit()
    return auth_client


async def test_salex_listing_newest_date_first(salex):
    body = (await salex.get("/api/v1/salex")).json()

    assert [row["invoice_no"] for row in body["salex"]] == ["S-3", "S-2", "S-1", "S-4"]
    s2 = body["salex"][1]
    assert s2["customer_name"] == "Walk-in"
    assert s2["customer_gstin"] == "03XYZ"
    assert s2["item_count"] == 1
    assert s2["formatted_total"] == "₹590.00"


@pytest.mark.parametrize("params, expected", [
    ({"status": "0"}, ["S-1"]),
    ({"status": "1"}, ["S-2"]),
    ({"status": "unknown"}, ["S-4"]),
    ({"amount_min": 100, "amount_max": 600}, ["S-2", "S-1"]),
    ({"amount_min": 1000}, ["S-3"]),
    ({"search": "S-4"}, ["S-4"]),
])
async def test_salex_filters(salex, params, expected):
    response = await salex.get("/api/v1/salex", params=params)
    assert [row["invoice_no"] for row in response.json()["salex"]] == expected


async def test_salex_rejects_unknown_status_value(salex):
    response = await salex.get("/api/v1/salex", params={"status": "closed"})
    assert response.status_code == 400
