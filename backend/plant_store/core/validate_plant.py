"""Plant Validation — create and purchase input checks, pure and ordered.

Invariants:
    - First failing check wins; each failure raises InvalidInputError with a client message
    - Order for create: required fields -> price -> quantity -> field limits
    - Returned NewPlant is fully normalized (trimmed, lowercased, defaulted)
    - Purchase quantity must be a positive integer; absent means 1
    - Stored quantities never exceed MAX_QUANTITY (the column's integer range)

Design Decisions:
    - Loose request schemas + explicit validation here: the check order and
      messages are part of the API contract, Pydantic's are not
    - Booleans are never numbers (JSON true must not become quantity 1)
"""

import math
from uuid import UUID
from typing import Any

from plant_store.core.domain_types import (
    NewPlant, LightLevel, PlantId, DEFAULT_IMAGE_URL,
    MAX_NAME_LENGTH, MAX_DESCRIPTION_LENGTH, MAX_CATEGORY_LENGTH, MAX_QUANTITY,
)
from plant_store.core.errors import InvalidInputError

REQUIRED_FIELDS_MESSAGE = "Name, price, and at least one category are required"
PRICE_MESSAGE = "Price must be a non-negative number"
QUANTITY_MESSAGE = "Quantity must be a non-negative integer"
PURCHASE_QUANTITY_MESSAGE = "Purchase quantity must be a positive integer"


def coerce_integer(value: Any) -> int | None:
    """Integral value of ints, integral floats, and integral numeric strings."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        try:
            return int(value)
        except ValueError:
            pass
        try:
            value = float(value)
        except ValueError:
            return None
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    return None


def coerce_price(value: Any) -> float | None:
    """Finite float from a number or numeric string; None otherwise."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        price = float(value)
    elif isinstance(value, str):
        try:
            price = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return price if math.isfinite(price) else None


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _normalize_category_list(raw: Any) -> tuple[str, ...]:
    if isinstance(raw, str):
        raw = raw.split(",")
    categories: list[str] = []
    for entry in raw:
        if not isinstance(entry, str) or not entry.strip():
            raise InvalidInputError(
                "Each category must be a non-empty string", "categories",
            )
        category = entry.strip().lower()
        if len(category) > MAX_CATEGORY_LENGTH:
            raise InvalidInputError(
                f"Categories must be at most {MAX_CATEGORY_LENGTH} characters",
                "categories",
            )
        if category not in categories:
            categories.append(category)
    return tuple(categories)


def _has_categories(raw: Any) -> bool:
    if isinstance(raw, str):
        return bool(raw.strip())
    if isinstance(raw, (list, tuple)):
        return len(raw) > 0
    return False


def validate_new_plant(payload: dict[str, Any]) -> NewPlant:
    """Validate and normalize a create request body."""
    name = payload.get("name")
    price = payload.get("price")
    categories = payload.get("categories")
    quantity = payload.get("quantity")

    # 1. required fields
    if _is_blank(name) or price is None or not _has_categories(categories):
        raise InvalidInputError(REQUIRED_FIELDS_MESSAGE)

    # 2. price
    parsed_price = coerce_price(price)
    if parsed_price is None or parsed_price < 0:
        raise InvalidInputError(PRICE_MESSAGE, "price")

    # 3. quantity
    parsed_quantity = 0
    if quantity is not None:
        parsed_quantity = coerce_integer(quantity)
        if (
            parsed_quantity is None
            or parsed_quantity < 0
            or parsed_quantity > MAX_QUANTITY
        ):
            raise InvalidInputError(QUANTITY_MESSAGE, "quantity")

    # 4. field limits
    if not isinstance(name, str):
        raise InvalidInputError("Name must be a string", "name")
    name = name.strip()
    if len(name) > MAX_NAME_LENGTH:
        raise InvalidInputError(
            f"Name must be at most {MAX_NAME_LENGTH} characters", "name",
        )
    normalized_categories = _normalize_category_list(categories)

    description = payload.get("description")
    if description is None:
        description = ""
    if not isinstance(description, str):
        raise InvalidInputError("Description must be a string", "description")
    description = description.strip()
    if len(description) > MAX_DESCRIPTION_LENGTH:
        raise InvalidInputError(
            f"Description must be at most {MAX_DESCRIPTION_LENGTH} characters",
            "description",
        )

    image = payload.get("image") or DEFAULT_IMAGE_URL
    if not isinstance(image, str):
        raise InvalidInputError("Image must be a URL string", "image")

    light = payload.get("light") or LightLevel.MEDIUM.value
    try:
        light_level = LightLevel(light)
    except ValueError:
        allowed = ", ".join(level.value for level in LightLevel)
        raise InvalidInputError(f"Light must be one of: {allowed}", "light")

    return NewPlant(
        name=name,
        price=parsed_price,
        categories=normalized_categories,
        quantity=parsed_quantity,
        description=description,
        image=image,
        light=light_level,
    )


def validate_purchase_quantity(raw: Any) -> int:
    """Requested purchase amount; defaults to 1 when absent."""
    if raw is None:
        return 1
    quantity = coerce_integer(raw)
    if quantity is None or quantity < 1:
        raise InvalidInputError(PURCHASE_QUANTITY_MESSAGE, "quantity")
    return quantity


def parse_plant_id(raw: str) -> PlantId | None:
    """UUID from a path segment; malformed ids resolve to None (treated as not found)."""
    try:
        return PlantId(UUID(str(raw)))
    except ValueError:
        return None
