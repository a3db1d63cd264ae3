"""States, customers and vendors."""


STATES_URL = "/api/v1/states"
CUSTOMERS_URL = "/api/v1/customers"
VENDORS_URL = "/api/v1/vendors"


# ==================== States ====================

async def test_create_and_list_states(auth_client, seed):
    response = await auth_client.post(STATES_URL, json={"state_name": "  Haryana  ", "code": 6})

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "State created successfully"
    assert body["state"]["state_name"] == "Haryana"
    assert body["state"]["code"] == 6

    listing = (await auth_client.get(STATES_URL)).json()
    assert [s["state_name"] for s in listing["states"]] == ["Haryana", "Punjab"]
    assert listing["pagination"] == {
        "page": 1, "limit": 50, "total": 2, "total_pages": 1, "has_more": False,
    }


async def test_state_code_defaults_to_zero(auth_client, seed):
    response = await auth_client.post(STATES_URL, json={"state_name": "Goa"})
    assert response.json()["state"]["code"] == 0


async def test_state_search_and_paging(auth_client, seed):
    for name in ("Gujarat", "Goa", "Haryana"):
        await auth_client.post(STATES_URL, json={"state_name": name})

    search = (await auth_client.get(STATES_URL, params={"search": "g"})).json()
    assert [s["state_name"] for s in search["states"]] == ["Goa", "Gujarat"]

    page = (await auth_client.get(STATES_URL, params={"page": 2, "limit": 3})).json()
    assert [s["state_name"] for s in page["states"]] == ["Punjab"]
    assert page["pagination"]["total_pages"] == 2
    assert page["pagination"]["has_more"] is False


async def test_state_name_rules(auth_client, seed):
    blank = await auth_client.post(STATES_URL, json={"state_name": "   "})
    assert blank.status_code == 400

    duplicate = await auth_client.post(STATES_URL, json={"state_name": "PUNJAB"})
    assert duplicate.status_code == 409

    other = (await auth_client.post(STATES_URL, json={"state_name": "Kerala"})).json()["state"]
    clash = await auth_client.put(f"{STATES_URL}/{other['id']}", json={"state_name": "punjab"})
    assert clash.status_code == 409

    # Renaming to its own name is not a clash
    same = await auth_client.put(f"{STATES_URL}/{other['id']}", json={"state_name": "KERALA", "code": 32})
    assert same.status_code == 200
    assert same.json()["state"] == {"id": other["id"], "state_name": "KERALA", "code": 32}

    missing = await auth_client.put(f"{STATES_URL}/999", json={"state_name": "Nowhere"})
    assert missing.status_code == 404


async def test_state_in_use_cannot_be_deleted(auth_client, seed):
    in_use = await auth_client.delete(f"{STATES_URL}/{seed.state_id}")
    assert in_use.status_code == 409

    unused = (await auth_client.post(STATES_URL, json={"state_name": "Sikkim"})).json()["state"]
    deleted = await auth_client.delete(f"{STATES_URL}/{unused['id']}")
    assert deleted.status_code == 200
    assert deleted.json() == {"message": "State deleted successfully"}

    assert (await auth_client.delete(f"{STATES_URL}/{unused['id']}")).status_code == 404


# ==================== Customers ====================

async def test_customer_crud(auth_client, seed):
    created = await auth_client.post(CUSTOMERS_URL, json={
        "billing_name": "Singh Garage",
        "billing_address": "Mall Road, Amritsar",
        "billing_state": seed.state_id,
        "billing_gstin": "03BBBBB1111B1Z5",
        "contact_no": 9888877777,
        "shipping_name": "Singh Garage Workshop",
        "shipping_state": seed.state_id,
    })
    assert created.status_code == 201, created.text
    customer = created.json()["customer"]
    assert customer["billing_state_name"] == "Punjab"
    assert customer["shipping_state_name"] == "Punjab"
    assert customer["contact_no"] == "9888877777"

    listing = (await auth_client.get(CUSTOMERS_URL)).json()["customers"]
    assert [c["name"] for c in listing] == ["Kumar Motors", "Singh Garage"]
    assert listing[1] == {
        "id": customer["id"],
        "name": "Singh Garage",
        "gstin": "03BBBBB1111B1Z5",
        "contact": "9888877777",
        "email": "",
    }

    updated = await auth_client.put(
        f"{CUSTOMERS_URL}/{customer['id']}", json={"email": "singh@example.com"}
    )
    assert updated.status_code == 200
    assert updated.json()["message"] == "Customer updated successfully"
    assert updated.json()["customer"]["email"] == "singh@example.com"
    assert updated.json()["customer"]["billing_name"] == "Singh Garage"

    deleted = await auth_client.delete(f"{CUSTOMERS_URL}/{customer['id']}")
    assert deleted.json() == {"message": "Customer deleted successfully"}
    assert (await auth_client.get(f"{CUSTOMERS_URL}/{customer['id']}")).status_code == 404


async def test_customer_requires_billing_name(auth_client, seed):
    response = await auth_client.post(CUSTOMERS_URL, json={"billing_address": "Somewhere"})
    assert response.status_code == 400


async def test_get_customer(auth_client, seed):
    response = await auth_client.get(f"{CUSTOMERS_URL}/{seed.customer_id}")

    assert response.status_code == 200
    body = response.json()
    assert body["billing_name"] == "Kumar Motors"
    assert body["billing_state_name"] == "Punjab"
    assert body["shipping_state_name"] is None


# ==================== Vendors ====================

async def test_vendor_crud(auth_client, seed):
    created = await auth_client.post(VENDORS_URL, json={
        "vendor_name": "Arora Spares",
        "address": "Link Road",
        "state": seed.state_id,
        "tax_id": "03CCCCC2222C1Z5",
    })
    assert created.status_code == 201, created.text
    vendor = created.json()["vendor"]
    assert vendor["state_name"] == "Punjab"
    assert vendor["tax_id"] == "03CCCCC2222C1Z5"

    listing = (await auth_client.get(VENDORS_URL)).json()["vendors"]
    assert [v["name"] for v in listing] == ["Arora Spares", "Sharma Auto Traders"]
    assert listing[0]["gstin"] == "03CCCCC2222C1Z5"

    updated = await auth_client.put(f"{VENDORS_URL}/{vendor['id']}", json={"address_2": "Phase 2"})
    assert updated.json()["vendor"]["address_2"] == "Phase 2"
    assert updated.json()["vendor"]["address"] == "Link Road"

    fetched = await auth_client.get(f"{VENDORS_URL}/{seed.vendor_id}")
    assert fetched.json()["vendor_name"] == "Sharma Auto Traders"

    deleted = await auth_client.delete(f"{VENDORS_URL}/{vendor['id']}")
    assert deleted.json() == {"message": "Vendor deleted successfully"}
    assert (await auth_client.delete(f"{VENDORS_URL}/{vendor['id']}")).status_code == 404
