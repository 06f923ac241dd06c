"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - decrement_quantity_if_sufficient is ONE atomic step in the implementation,
      never a read followed by a write

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID

from plant_store.core.domain_types import (
    DecrementStatus, NewPlant, PlantFilter, PlantId,
)


class PlantLike(Protocol):
    """Structural contract for Plant records returned by a store.

    Avoids coupling the service to the ORM model while keeping real type information.
    """
    id: UUID
    name: str
    price: float
    quantity: int
    description: str
    image: str
    light: str
    created_at: datetime
    updated_at: datetime

    @property
    def categories(self) -> list[str]: ...


@dataclass(frozen=True)
class DecrementOutcome:
    """Result of a conditional decrement.

    plant is the updated record on PURCHASED, the record as read after the
    failed attempt on INSUFFICIENT_STOCK, and None on NOT_FOUND.
    """
    status: DecrementStatus
    plant: PlantLike | None = None


class CatalogStore(Protocol):
    """Contract for plant persistence — implemented by shell."""
    async def is_available(self) -> bool: ...
    async def find_many(self, plant_filter: PlantFilter) -> list[PlantLike]: ...
    async def find_by_id(self, plant_id: PlantId) -> PlantLike | None: ...
    async def insert(self, new_plant: NewPlant) -> PlantLike: ...
    async def distinct_categories(self) -> list[str]: ...
    async def decrement_quantity_if_sufficient(
        self, plant_id: PlantId, amount: int,
    ) -> DecrementOutcome: ...
