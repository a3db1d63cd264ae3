"""Catalog lookups and products."""
import pytest


PRODUCTS_URL = "/api/v1/products"


# ==================== Lookups ====================

@pytest.mark.parametrize("url, column", [
    ("/api/v1/categories", "category_name"),
    ("/api/v1/companies", "company_name"),
    ("/api/v1/car-models", "model_name"),
])
async def test_lookup_crud(auth_client, seed, url, column):
    created = await auth_client.post(url, json={column: "  Zeta  "})
    assert created.status_code == 201, created.text
    row = created.json()
    assert row["name"] == "Zeta"

    by_name = await auth_client.post(url, json={"name": "Alpha"})
    assert by_name.status_code == 201

    listing = (await auth_client.get(url)).json()
    names = [item["name"] for item in listing["items"]]
    assert names[0] == "Alpha"
    assert names[-1] == "Zeta"
    assert [item["index"] for item in listing["items"]] == list(range(1, len(names) + 1))

    renamed = await auth_client.put(f"{url}/{row['id']}", json={"name": "Omega"})
    assert renamed.status_code == 200
    assert renamed.json() == {"id": row["id"], "name": "Omega", "index": None}

    deleted = await auth_client.delete(f"{url}/{row['id']}")
    assert deleted.status_code == 204
    assert (await auth_client.put(f"{url}/{row['id']}", json={"name": "Again"})).status_code == 404


@pytest.mark.parametrize("url", ["/api/v1/categories", "/api/v1/companies", "/api/v1/subcategories"])
async def test_lookup_name_is_required(auth_client, seed, url):
    response = await auth_client.post(url, json={"name": "   "})
    assert response.status_code == 400


async def test_lookup_index_runs_across_pages(auth_client, seed):
    for name in ("Filters", "Lighting", "Suspension"):
        await auth_client.post("/api/v1/categories", json={"category_name": name})

    page = (await auth_client.get("/api/v1/categories", params={"page": 2, "limit": 2})).json()

    assert [(i["name"], i["index"]) for i in page["items"]] == [("Lighting", 3), ("Suspension", 4)]
    assert page["pagination"]["total"] == 4

    search = (await auth_client.get("/api/v1/categories", params={"search": "fil"})).json()
    assert [i["name"] for i in search["items"]] == ["Filters"]


async def test_subcategories_are_list_and_create_only(auth_client, seed):
    created = await auth_client.post("/api/v1/subcategories", json={"subcategory_name": "Rotors"})
    assert created.status_code == 201

    listing = (await auth_client.get("/api/v1/subcategories")).json()
    assert [i["name"] for i in listing["items"]] == ["Pads", "Rotors"]

    rename = await auth_client.put(f"/api/v1/subcategories/{created.json()['id']}", json={"name": "X"})
    assert rename.status_code in (404, 405)


# ==================== Products ====================

async def test_list_products_newest_first(auth_client, seed):
    response = await auth_client.get(PRODUCTS_URL)

    assert response.status_code == 200
    body = response.json()
    assert [p["id"] for p in body["products"]] == [56, 55]
    assert body["pagination"]["total"] == 2


@pytest.mark.parametrize("term, expected", [
    ("brake pad", [55]),
    ("BP-100", [55]),
    ("filter", [56]),
    ("of-200", [56]),
    ("radiator", []),
])
async def test_product_search(auth_client, seed, term, expected):
    response = await auth_client.get(PRODUCTS_URL, params={"search": term})
    assert [p["id"] for p in response.json()["products"]] == expected


async def test_product_category_filter(auth_client, seed):
    response = await auth_client.get(PRODUCTS_URL, params={"category": seed.category_id})
    assert [p["id"] for p in response.json()["products"]] == [55]


async def test_create_product(auth_client, seed):
    response = await auth_client.post(PRODUCTS_URL, json={
        "product_name": "Clutch Plate",
        "part_no": 4471,
        "company": seed.company_id,
        "car_model_ids": [seed.swift_id, seed.city_id],
        "rate": 950,
        "rack_number": "R-12",
        "mrp": 1100,
    })

    assert response.status_code == 201, response.text
    body = response.json()
    assert body["display_name"] == "Clutch Plate"
    assert body["part_no"] == "4471"
    assert body["company_id"] == seed.company_id
    assert body["stock"] == 0
    assert body["car_model_ids"] == f"{seed.swift_id},{seed.city_id}"
    assert body["notes"] == "Additional Data:\nRack: R-12\nMRP: 1100"


async def test_create_product_without_extras_keeps_notes(auth_client, seed):
    response = await auth_client.post(PRODUCTS_URL, json={
        "product_name": "Horn",
        "display_name": "Horn 12V",
        "notes": "Loud",
        "stock": 4,
    })

    body = response.json()
    assert body["display_name"] == "Horn 12V"
    assert body["notes"] == "Loud"
    assert body["stock"] == 4


async def test_create_product_rules(auth_client, seed):
    nameless = await auth_client.post(PRODUCTS_URL, json={"product_name": "  "})
    assert nameless.status_code == 400
    assert nameless.json()["detail"] == "Product name is required"

    bad_company = await auth_client.post(PRODUCTS_URL, json={"product_name": "Horn", "company": 999})
    assert bad_company.status_code == 400
    assert bad_company.json()["detail"] == "Invalid company selected"


async def test_get_product_with_names(auth_client, seed):
    response = await auth_client.get(f"{PRODUCTS_URL}/55")

    assert response.status_code == 200
    body = response.json()
    assert body["category_name"] == "Brake Parts"
    assert body["subcategory_name"] == "Pads"
    assert body["company_name"] == "Bosch"
    assert body["car_model_names"] == ["Swift", "City"]
    assert body["car_models_display"] == "Swift, City"

    assert (await auth_client.get(f"{PRODUCTS_URL}/999")).status_code == 404


async def test_optimized_listing_flags_and_rates(auth_client, seed):
    body = (await auth_client.get(f"{PRODUCTS_URL}/optimized")).json()

    rows = {p["id"]: p for p in body["products"]}
    assert rows[55]["low_stock"] is False
    assert rows[56]["low_stock"] is True
    assert rows[55]["latest_purchase_rate"] == 500
    assert rows[55]["company_name"] == "Bosch"

    await auth_client.post("/api/v1/purchases", json={
        "invoice_no": 1,
        "invoice_date": "2024-04-02",
        "total_taxable_value": 440,
        "total": 519.2,
        "purchaseItems": [{"product_id": 55, "qty": 1, "rate": 440, "subtotal": 440}],
    })

    body = (await auth_client.get(f"{PRODUCTS_URL}/optimized")).json()
    rows = {p["id"]: p for p in body["products"]}
    assert rows[55]["latest_purchase_rate"] == 440
    assert rows[56]["latest_purchase_rate"] == 150


@pytest.mark.parametrize("params, expected", [
    ({"low_stock": "true"}, [56]),
    ({"category": "Brake Parts"}, [55]),
    ({"category": "No Such Category"}, []),
    ({"company": "Bosch"}, [56, 55]),
    ({"company": "Nobody"}, []),
    ({"subcategory": "Swift"}, [55]),
])
async def test_optimized_listing_filters(auth_client, seed, params, expected):
    response = await auth_client.get(f"{PRODUCTS_URL}/optimized", params=params)

    assert response.status_code == 200
    body = response.json()
    assert [p["id"] for p in body["products"]] == expected
    assert body["pagination"]["total"] == len(expected)


async def test_optimized_listing_model_filter(auth_client, seed):
    swift = (await auth_client.get(f"{PRODUCTS_URL}/optimized", params={"model": str(seed.swift_id)})).json()
    both = (await auth_client.get(
        f"{PRODUCTS_URL}/optimized", params={"model": f"{seed.swift_id},{seed.city_id}"}
    )).json()

    assert [p["id"] for p in swift["products"]] == [55]
    assert [p["id"] for p in both["products"]] == [56, 55]


async def test_filter_options(auth_client, seed):
    response = await auth_client.get(f"{PRODUCTS_URL}/filters")

    assert response.json() == {
        "categories": [{"id": seed.category_id, "name": "Brake Parts"}],
        "subcategories": [{"id": seed.subcategory_id, "name": "Pads"}],
        "companies": [{"id": seed.company_id, "name": "Bosch"}],
    }
