"""Error Hierarchy — envelope rendering and status mapping per error type.

Tests cover:
    - each taxonomy member maps to its HTTP status and code
    - to_response() is the failure envelope; data only when present
    - InternalError never carries caller-supplied detail by default
"""

import pytest

from plant_store.core.errors import (
    ErrorCategory,
    InternalError,
    InsufficientStockError,
    InvalidInputError,
    PlantNotFoundError,
    PlantStoreError,
    StoreUnavailableError,
)


@pytest.mark.parametrize("error,status,code", [
    (InvalidInputError("bad"), 400, "INVALID_INPUT"),
    (PlantNotFoundError("abc"), 404, "NOT_FOUND"),
    (InsufficientStockError(0, 1), 400, "INSUFFICIENT_STOCK"),
    (StoreUnavailableError(), 503, "STORE_UNAVAILABLE"),
    (InternalError(), 500, "INTERNAL_ERROR"),
])
def test_status_and_code(error, status, code):
    assert isinstance(error, PlantStoreError)
    assert error.http_status == status
    assert error.code == code


def test_invalid_input_envelope():
    error = InvalidInputError("Price must be a non-negative number", "price")
    assert error.to_response() == {
        "success": False, "message": "Price must be a non-negative number",
    }
    assert error.field == "price"
    assert error.category is ErrorCategory.VALIDATION


def test_insufficient_stock_carries_current_quantity():
    error = InsufficientStockError(current_quantity=2, requested=5)
    assert error.to_response() == {
        "success": False,
        "message": "Only 2 items available in stock",
        "data": {"currentQuantity": 2},
    }
    assert error.requested == 5


def test_not_found_records_plant_id_in_context():
    error = PlantNotFoundError("xyz")
    assert error.message == "Plant not found"
    assert error.context.plant_id == "xyz"


def test_store_unavailable_records_operation():
    error = StoreUnavailableError("purchase")
    assert error.operation == "purchase"
    assert error.context.operation == "purchase"
    assert "try again later" in error.message


def test_internal_error_default_message_is_generic():
    assert InternalError().to_response() == {
        "success": False, "message": "Something went wrong!",
    }
