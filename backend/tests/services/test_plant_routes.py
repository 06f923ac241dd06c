"""Plant Routes — HTTP contract: paths, status codes, envelope, camelCase payloads.

Tests cover:
    - POST /plants -> 201 with normalized plant; 400 on invalid input
    - GET /plants with search, repeated/comma-joined category, inStock
    - GET /plants/{id} -> 200 | 404 (malformed and unknown ids alike)
    - POST /plants/{id}/purchase -> 200 with message | 400 | 404
    - GET /plants/meta/categories -> distinct sorted list
    - malformed bodies and unknown routes still answer with the envelope
"""

from uuid import uuid4


async def _create(client, **overrides):
    body = {"name": "Aloe Vera", "price": 12.5, "categories": ["Succulent"], "quantity": 3}
    body.update(overrides)
    return await client.post("/plants", json=body)


# ─── create ──────────────────────────────────────────────────────

async def test_create_returns_201_with_plant(client):
    res = await _create(client, description="  Easy care  ", light="High")
    assert res.status_code == 201
    payload = res.json()
    assert payload["success"] is True
    plant = payload["data"]
    assert plant["name"] == "Aloe Vera"
    assert plant["price"] == 12.5
    assert plant["categories"] == ["succulent"]
    assert plant["quantity"] == 3
    assert plant["description"] == "Easy care"
    assert plant["light"] == "High"
    assert plant["image"].startswith("https://images.pexels.com/")
    assert {"id", "createdAt", "updatedAt"} <= plant.keys()


async def test_create_negative_price_is_400(client):
    res = await _create(client, price=-1)
    assert res.status_code == 400
    assert res.json() == {
        "success": False, "message": "Price must be a non-negative number",
    }


async def test_create_empty_categories_is_400(client):
    res = await _create(client, categories=[])
    assert res.status_code == 400
    assert res.json()["message"] == "Name, price, and at least one category are required"


async def test_create_fractional_quantity_is_400(client):
    res = await _create(client, quantity=2.5)
    assert res.status_code == 400
    assert res.json()["message"] == "Quantity must be a non-negative integer"


async def test_create_with_non_object_body_is_400_envelope(client):
    res = await client.post("/plants", json=["not", "an", "object"])
    assert res.status_code == 400
    payload = res.json()
    assert payload["success"] is False
    assert payload["message"] == "Invalid request data"


# ─── list ────────────────────────────────────────────────────────

async def test_list_empty_catalog(client):
    res = await client.get("/plants")
    assert res.status_code == 200
    assert res.json() == {"success": True, "data": []}


async def test_list_category_and_in_stock(client, make_plant):
    await make_plant(name="A", categories=("succulent",), quantity=0)
    await make_plant(name="B", categories=("succulent",), quantity=5)
    await make_plant(name="C", categories=("fern",), quantity=5)

    res = await client.get("/plants", params={"category": "succulent", "inStock": "true"})

    assert [p["name"] for p in res.json()["data"]] == ["B"]


async def test_list_repeated_and_comma_joined_categories(client, make_plant):
    await make_plant(name="A", categories=("succulent",))
    await make_plant(name="B", categories=("fern",))
    await make_plant(name="C", categories=("orchid",))

    repeated = await client.get(
        "/plants", params=[("category", "succulent"), ("category", "Fern")],
    )
    joined = await client.get("/plants", params={"category": "succulent,fern"})

    assert [p["name"] for p in repeated.json()["data"]] == ["B", "A"]
    assert [p["name"] for p in joined.json()["data"]] == ["B", "A"]


async def test_list_search(client, make_plant):
    await make_plant(name="Aloe Vera")
    await make_plant(name="Boston Fern", categories=("fern",))

    hit = await client.get("/plants", params={"search": "aloe"})
    miss = await client.get("/plants", params={"search": "zzz"})

    assert [p["name"] for p in hit.json()["data"]] == ["Aloe Vera"]
    assert miss.json() == {"success": True, "data": []}


async def test_list_out_of_stock_only(client, make_plant):
    await make_plant(name="Sold Out", quantity=0)
    await make_plant(name="Plenty", quantity=9)

    res = await client.get("/plants", params={"inStock": "false"})

    assert [p["name"] for p in res.json()["data"]] == ["Sold Out"]


# ─── get ─────────────────────────────────────────────────────────

async def test_get_existing_plant(client, make_plant):
    plant = await make_plant(name="Pothos", categories=("vine", "indoor"))
    res = await client.get(f"/plants/{plant.id}")
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["id"] == str(plant.id)
    assert data["categories"] == ["vine", "indoor"]


async def test_get_malformed_id_is_404(client):
    res = await client.get("/plants/not-an-id")
    assert res.status_code == 404
    assert res.json() == {"success": False, "message": "Plant not found"}


async def test_get_unknown_id_is_404(client):
    res = await client.get(f"/plants/{uuid4()}")
    assert res.status_code == 404


# ─── purchase ────────────────────────────────────────────────────

async def test_purchase_success(client, make_plant):
    plant = await make_plant(name="Aloe Vera", quantity=5)
    res = await client.post(f"/plants/{plant.id}/purchase", json={"quantity": 2})
    assert res.status_code == 200
    payload = res.json()
    assert payload["success"] is True
    assert payload["message"] == "Successfully purchased 2 Aloe Vera(s)"
    assert payload["data"]["quantity"] == 3


async def test_purchase_without_body_buys_one(client, make_plant):
    plant = await make_plant(quantity=5)
    res = await client.post(f"/plants/{plant.id}/purchase")
    assert res.status_code == 200
    assert res.json()["data"]["quantity"] == 4


async def test_purchase_zero_is_400(client, make_plant):
    plant = await make_plant(quantity=5)
    res = await client.post(f"/plants/{plant.id}/purchase", json={"quantity": 0})
    assert res.status_code == 400
    assert res.json()["message"] == "Purchase quantity must be a positive integer"


async def test_purchase_insufficient_stock(client, make_plant):
    plant = await make_plant(quantity=1)
    res = await client.post(f"/plants/{plant.id}/purchase", json={"quantity": 4})
    assert res.status_code == 400
    assert res.json() == {
        "success": False,
        "message": "Only 1 items available in stock",
        "data": {"currentQuantity": 1},
    }


async def test_purchase_unknown_plant_is_404(client):
    res = await client.post(f"/plants/{uuid4()}/purchase", json={"quantity": 1})
    assert res.status_code == 404


async def test_purchase_then_get_reflects_new_quantity(client, make_plant):
    plant = await make_plant(quantity=2)
    await client.post(f"/plants/{plant.id}/purchase", json={"quantity": 2})
    res = await client.get(f"/plants/{plant.id}")
    assert res.json()["data"]["quantity"] == 0


# ─── categories / misc ───────────────────────────────────────────

async def test_categories_endpoint(client, make_plant):
    await make_plant(categories=("succulent", "indoor"))
    await make_plant(categories=("fern",))
    res = await client.get("/plants/meta/categories")
    assert res.status_code == 200
    assert res.json() == {"success": True, "data": ["fern", "indoor", "succulent"]}


async def test_unknown_route_uses_envelope(client):
    res = await client.get("/nowhere")
    assert res.status_code == 404
    assert res.json()["success"] is False


async def test_cors_allows_configured_origin(client):
    res = await client.get("/health", headers={"Origin": "http://localhost:5173"})
    assert res.headers["access-control-allow-origin"] == "http://localhost:5173"
