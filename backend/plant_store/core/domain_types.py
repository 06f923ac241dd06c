"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - PlantId wraps UUID — route strings are parsed once, at the service boundary
    - LightLevel enumerates the only valid light requirements
    - NewPlant is already normalized: stores persist it without further checks

Design Decisions:
    - NewType over dataclass wrappers for identifiers: zero runtime cost
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

PlantId = NewType("PlantId", UUID)


# ─── Constants ───────────────────────────────────────────────────

DEFAULT_IMAGE_URL = (
    "https://images.pexels.com/photos/1084199/pexels-photo-1084199.jpeg"
    "?auto=compress&cs=tinysrgb&w=400"
)
MAX_NAME_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500
MAX_CATEGORY_LENGTH = 100
# plants.quantity is a 32-bit INTEGER column
MAX_QUANTITY = 2**31 - 1


# ─── Enums ───────────────────────────────────────────────────────

class LightLevel(str, Enum):
    """Light requirement of a plant — maps to DB `light` column."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class DecrementStatus(str, Enum):
    """Outcome of the store's conditional quantity decrement."""
    PURCHASED = "purchased"
    INSUFFICIENT_STOCK = "insufficient_stock"
    NOT_FOUND = "not_found"


# ─── Value Objects ───────────────────────────────────────────────

@dataclass(frozen=True)
class NewPlant:
    """Validated, normalized plant ready for insertion."""
    name: str
    price: float
    categories: tuple[str, ...]
    quantity: int = 0
    description: str = ""
    image: str = DEFAULT_IMAGE_URL
    light: LightLevel = LightLevel.MEDIUM


@dataclass(frozen=True)
class PlantFilter:
    """Canonical listing predicate. Present fields are AND-combined.

    search: case-insensitive substring over name, categories, description (OR)
    categories: match plants whose categories intersect this set
    in_stock: True -> quantity > 0, False -> quantity == 0, None -> no filter
    """
    search: str | None = None
    categories: frozenset[str] = frozenset()
    in_stock: bool | None = None

    @property
    def is_empty(self) -> bool:
        return not self.search and not self.categories and self.in_stock is None
