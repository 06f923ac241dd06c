"""Plant Schemas — response serialization and loose request bodies.

Invariants:
    - serialize_plant reads attributes (ORM-like objects) and emits camelCase timestamps
    - envelope omits data/message when absent but keeps an empty list
    - PlantCreate accepts any JSON field values and ignores unknown keys
"""

from datetime import datetime, timezone
from types import SimpleNamespace
from uuid import uuid4

from plant_store.schemas.plant import (
    PlantCreate, PurchaseRequest, serialize_plant, envelope,
)


def _plant_like(**overrides):
    now = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
    fields = dict(
        id=uuid4(), name="Aloe Vera", price=12.5, categories=["succulent"],
        quantity=3, description="", image="https://x.test/a.png",
        light="Medium", created_at=now, updated_at=now,
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


def test_serialize_plant_uses_camel_case_timestamps():
    plant = _plant_like()
    data = serialize_plant(plant)
    assert data["id"] == str(plant.id)
    assert data["createdAt"] == "2026-03-01T12:00:00Z"
    assert data["updatedAt"] == "2026-03-01T12:00:00Z"
    assert "created_at" not in data
    assert data["categories"] == ["succulent"]


def test_envelope_shapes():
    assert envelope() == {"success": True}
    assert envelope([]) == {"success": True, "data": []}
    assert envelope({"a": 1}, "done") == {
        "success": True, "data": {"a": 1}, "message": "done",
    }


def test_plant_create_is_loose():
    body = PlantCreate.model_validate(
        {"name": 5, "price": "abc", "categories": "x", "extra": True},
    )
    dumped = body.model_dump()
    assert dumped["name"] == 5
    assert dumped["price"] == "abc"
    assert "extra" not in dumped
    assert dumped["quantity"] is None


def test_purchase_request_quantity_optional():
    assert PurchaseRequest().quantity is None
    assert PurchaseRequest(quantity=3).quantity == 3
