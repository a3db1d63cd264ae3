"""Purchase entry, register and maintenance."""
from sqlalchemy import select, func

from app.models import Product, Purchase, PurchaseItem


PURCHASES_URL = "/api/v1/purchases"


def purchase_payload(seed, **overrides):
    payload = {
        "invoice_no": 1,
        "invoice_date": "2024-04-02",
        "select_vendor": seed.vendor_id,
        "bill_reference": "SAT/991",
        "total_taxable_value": 750,
        "total_cgst": 67.5,
        "total_sgst": 67.5,
        "total_tax": 135,
        "total": 885,
        "purchaseItems": [{"product_id": 55, "qty": 5, "rate": 150, "subtotal": 750}],
    }
    payload.update(overrides)
    return payload


async def stock_of(session_factory, product_id):
    async with session_factory() as session:
        return (await session.get(Product, product_id)).stock


async def test_purchase_entry_increments_stock(auth_client, seed, session_factory):
    response = await auth_client.post(PURCHASES_URL, json=purchase_payload(seed))

    assert response.status_code == 201, response.text
    body = response.json()
    assert body["invoice_no"] == 1
    assert body["vendor_id"] == seed.vendor_id
    assert body["total"] == 885
    assert body["status"] == 1
    assert body["type"] == "purchase"
    assert await stock_of(session_factory, 55) == 15


async def test_purchase_validation_and_reference_errors(auth_client, seed, session_factory):
    missing = await auth_client.post(PURCHASES_URL, json=purchase_payload(seed, invoice_no=None, total=0))
    assert missing.status_code == 400
    assert missing.json()["missing"] == ["invoice_no", "total"]

    no_qty = await auth_client.post(
        PURCHASES_URL,
        json=purchase_payload(seed, purchaseItems=[{"product_id": 55, "rate": 150, "subtotal": 750}]),
    )
    assert no_qty.status_code == 400
    assert no_qty.json()["malformed"] == ["purchaseItems[0].qty"]

    unknown = await auth_client.post(
        PURCHASES_URL,
        json=purchase_payload(seed, purchaseItems=[
            {"product_id": 55, "qty": 5, "rate": 150, "subtotal": 750},
            {"product_id": 404, "qty": 1, "rate": 1, "subtotal": 1},
        ]),
    )
    assert unknown.status_code == 422
    assert unknown.json()["product_ids"] == [404]

    async with session_factory() as session:
        assert (await session.execute(select(func.count(Purchase.id)))).scalar() == 0
        assert (await session.execute(select(func.count(PurchaseItem.id)))).scalar() == 0
    assert await stock_of(session_factory, 55) == 10


async def test_last_invoice_number(auth_client, seed):
    empty = await auth_client.get(f"{PURCHASES_URL}/last-invoice")
    assert empty.json() == {"last_invoice_number": 0}

    await auth_client.post(PURCHASES_URL, json=purchase_payload(seed, invoice_no=7))
    await auth_client.post(PURCHASES_URL, json=purchase_payload(seed, invoice_no=12))

    response = await auth_client.get(f"{PURCHASES_URL}/last-invoice")
    assert response.json() == {"last_invoice_number": 12}


async def test_purchase_register_resolves_vendor(auth_client, seed):
    await auth_client.post(PURCHASES_URL, json=purchase_payload(seed))
    await auth_client.post(
        PURCHASES_URL,
        json=purchase_payload(seed, invoice_no=2, select_vendor=None, notes="cash purchase"),
    )

    response = await auth_client.get(PURCHASES_URL)

    assert response.status_code == 200
    body = response.json()
    assert body["pagination"]["total"] == 2
    assert body["pagination"]["limit"] == 25
    newest, oldest = body["purchases"]
    assert newest["invoice_no"] == 2
    assert newest["vendor_name"] == "N/A"
    assert oldest["vendor_name"] == "Sharma Auto Traders"
    assert oldest["vendor_gstin"] == "03ABCDE1234F1Z5"
    assert oldest["item_count"] == 1
    assert oldest["formatted_date"] == "2/4/2024"
    assert oldest["formatted_total"] == "₹885.00"

    search = await auth_client.get(PURCHASES_URL, params={"search": "cash"})
    assert [row["invoice_no"] for row in search.json()["purchases"]] == [2]


async def test_purchase_detail(auth_client, seed):
    created = (await auth_client.post(PURCHASES_URL, json=purchase_payload(seed))).json()

    response = await auth_client.get(f"{PURCHASES_URL}/{created['id']}")

    assert response.status_code == 200
    body = response.json()
    assert body["vendor_name"] == "Sharma Auto Traders"
    assert body["vendor_address"] == "Industrial Area, Jalandhar"
    assert body["contact_number"] == "9812345678"
    assert body["email_id"] == "sales@sharmaauto.example"
    assert body["formatted_date"] == "2/4/2024"
    assert len(body["items"]) == 1
    assert body["items"][0]["product_id"] == 55
    assert body["items"][0]["qty"] == 5


async def test_purchase_detail_without_vendor_falls_back(auth_client, seed):
    with_reference = (await auth_client.post(
        PURCHASES_URL, json=purchase_payload(seed, select_vendor=None, bill_reference="Walk-in supplier"),
    )).json()
    bare = (await auth_client.post(
        PURCHASES_URL, json=purchase_payload(seed, invoice_no=2, select_vendor=None, bill_reference=None),
    )).json()

    first = await auth_client.get(f"{PURCHASES_URL}/{with_reference['id']}")
    second = await auth_client.get(f"{PURCHASES_URL}/{bare['id']}")

    assert first.json()["vendor_name"] == "Walk-in supplier"
    assert second.json()["vendor_name"] == "Unknown Vendor"


async def test_update_purchase_changes_only_supplied_fields(auth_client, seed):
    created = (await auth_client.post(PURCHASES_URL, json=purchase_payload(seed))).json()

    response = await auth_client.put(
        f"{PURCHASES_URL}/{created['id']}",
        json={"notes": "checked against GRN", "status": 0, "total": 1},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["notes"] == "checked against GRN"
    assert body["status"] == 0
    assert body["bill_reference"] == "SAT/991"
    # Amounts are not editable
    assert body["total"] == 885


async def test_delete_purchase_keeps_received_stock(auth_client, seed, session_factory):
    created = (await auth_client.post(PURCHASES_URL, json=purchase_payload(seed))).json()

    response = await auth_client.delete(f"{PURCHASES_URL}/{created['id']}")
    assert response.status_code == 204

    missing = await auth_client.get(f"{PURCHASES_URL}/{created['id']}")
    assert missing.status_code == 404

    async with session_factory() as session:
        assert (await session.execute(select(func.count(PurchaseItem.id)))).scalar() == 0
    assert await stock_of(session_factory, 55) == 15


async def test_unknown_purchase_is_404(auth_client):
    assert (await auth_client.get(f"{PURCHASES_URL}/999")).status_code == 404
    assert (await auth_client.put(f"{PURCHASES_URL}/999", json={"notes": "x"})).status_code == 404
    assert (await auth_client.delete(f"{PURCHASES_URL}/999")).status_code == 404
