"""Inventory Service — catalog operations and the purchase transaction.

Invariants:
    - Every operation probes the store first; unreachable -> StoreUnavailableError
    - Only PlantStoreError subclasses leave this module; anything else is logged
      with traceback and re-raised as InternalError with a generic message
    - Purchase: validate -> locate -> one conditional decrement -> terminal outcome
      (no retry: insufficient stock is a business outcome, not a transient fault)
    - No state held between calls (no cached quantities)

Design Decisions:
    - Store injected as CatalogStore protocol: tests swap in fakes for outage paths
    - Malformed ids and missing records share PlantNotFoundError (indistinguishable to callers)
"""

import logging
from collections.abc import Iterable
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any

from plant_store.core.domain_types import DecrementStatus, MAX_QUANTITY
from plant_store.core.errors import (
    PlantStoreError, InternalError, PlantNotFoundError,
    InsufficientStockError, StoreUnavailableError,
)
from plant_store.core.plant_filters import build_plant_filter
from plant_store.core.repository_protocols import CatalogStore, PlantLike
from plant_store.core.validate_plant import (
    validate_new_plant, validate_purchase_quantity, parse_plant_id,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PurchaseResult:
    """Successful purchase: updated plant plus confirmation text."""
    plant: PlantLike
    quantity: int
    message: str


class InventoryService:
    """Business operations over a CatalogStore."""

    def __init__(self, store: CatalogStore):
        self.store = store

    @asynccontextmanager
    async def _operation(self, name: str, failure_message: str):
        """Probe the store, then map unexpected faults onto InternalError."""
        try:
            if not await self.store.is_available():
                raise StoreUnavailableError(name)
            yield
        except InternalError as e:
            raise InternalError(failure_message) from e
        except PlantStoreError:
            raise
        except Exception as e:
            logger.error(
                f"{failure_message}: {e}",
                exc_info=True, extra={"operation": name},
            )
            raise InternalError(failure_message) from e

    async def list_plants(
        self,
        search: str | None = None,
        category: str | Iterable[str] | None = None,
        in_stock: str | None = None,
    ) -> list[PlantLike]:
        """Filtered listing, newest first. Empty list is a valid result."""
        async with self._operation("list_plants", "Error fetching plants"):
            plant_filter = build_plant_filter(search, category, in_stock)
            return await self.store.find_many(plant_filter)

    async def get_plant(self, raw_id: str) -> PlantLike:
        async with self._operation("get_plant", "Error fetching plant"):
            plant_id = parse_plant_id(raw_id)
            plant = await self.store.find_by_id(plant_id) if plant_id else None
            if plant is None:
                raise PlantNotFoundError(raw_id)
            return plant

    async def create_plant(self, payload: dict[str, Any]) -> PlantLike:
        """Validate, normalize and persist a new plant."""
        async with self._operation("create_plant", "Error creating plant"):
            new_plant = validate_new_plant(payload)
            return await self.store.insert(new_plant)

    async def purchase(self, raw_id: str, quantity: Any = None) -> PurchaseResult:
        """Decrement stock for one plant in a single atomic store step."""
        async with self._operation("purchase", "Error processing purchase"):
            amount = validate_purchase_quantity(quantity)

            plant_id = parse_plant_id(raw_id)
            located = await self.store.find_by_id(plant_id) if plant_id else None
            if located is None:
                raise PlantNotFoundError(raw_id)
            # stock never exceeds MAX_QUANTITY, and larger values overflow the column
            if amount > MAX_QUANTITY:
                raise InsufficientStockError(located.quantity, amount)

            outcome = await self.store.decrement_quantity_if_sufficient(
                plant_id, amount,
            )
            if outcome.status is DecrementStatus.INSUFFICIENT_STOCK:
                raise InsufficientStockError(outcome.plant.quantity, amount)
            if outcome.status is DecrementStatus.NOT_FOUND:
                raise PlantNotFoundError(raw_id)

            plant = outcome.plant
            logger.info(
                f"Purchased {amount} x '{plant.name}'",
                extra={"plant_id": str(plant.id), "quantity": amount},
            )
            return PurchaseResult(
                plant=plant,
                quantity=amount,
                message=f"Successfully purchased {amount} {plant.name}(s)",
            )

    async def list_categories(self) -> list[str]:
        async with self._operation("list_categories", "Error fetching categories"):
            return await self.store.distinct_categories()
