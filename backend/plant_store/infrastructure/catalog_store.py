"""SQL Catalog Store — SQLAlchemy implementation of the CatalogStore protocol.

Invariants:
    - decrement_quantity_if_sufficient is a single conditional UPDATE; the matched
      row count decides the outcome (no read-check-write in Python)
    - find_many ordering: created_at DESC, id DESC (deterministic on timestamp ties)
    - Raw SQLAlchemy errors leave this module only as PlantStoreError subclasses
    - is_available never waits longer than probe_timeout

Design Decisions:
    - One store per request, bound to the request's AsyncSession
    - Category predicates as EXISTS subqueries over plant_categories: same SQL on
      PostgreSQL (trigram indexes) and SQLite (LIKE scan)
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from sqlalchemy import select, update, or_, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from plant_store.core.domain_types import (
    DecrementStatus, NewPlant, PlantFilter, PlantId,
)
from plant_store.core.plant_filters import contains_pattern, LIKE_ESCAPE_CHAR
from plant_store.core.repository_protocols import DecrementOutcome
from plant_store.infrastructure.database import translate_store_error
from plant_store.models.plant import Plant
from plant_store.models.plant_category import PlantCategory

logger = logging.getLogger(__name__)

DEFAULT_PROBE_TIMEOUT_SECONDS = 2.0


def build_conditions(plant_filter: PlantFilter) -> list:
    """Translate a PlantFilter into SQLAlchemy WHERE clauses (AND-combined by caller)."""
    if plant_filter.is_empty:
        return []
    conditions = []
    if plant_filter.search:
        pattern = contains_pattern(plant_filter.search)
        conditions.append(or_(
            Plant.name.ilike(pattern, escape=LIKE_ESCAPE_CHAR),
            Plant.category_entries.any(
                PlantCategory.name.ilike(pattern, escape=LIKE_ESCAPE_CHAR),
            ),
            Plant.description.ilike(pattern, escape=LIKE_ESCAPE_CHAR),
        ))
    if plant_filter.categories:
        conditions.append(Plant.category_entries.any(
            PlantCategory.name.in_(sorted(plant_filter.categories)),
        ))
    if plant_filter.in_stock is True:
        conditions.append(Plant.quantity > 0)
    elif plant_filter.in_stock is False:
        conditions.append(Plant.quantity == 0)
    return conditions


class SqlCatalogStore:
    """Plant persistence over an async SQLAlchemy session."""

    def __init__(
        self, db: AsyncSession,
        probe_timeout: float = DEFAULT_PROBE_TIMEOUT_SECONDS,
    ):
        self.db = db
        self.probe_timeout = probe_timeout

    @asynccontextmanager
    async def _translate_errors(self, operation: str):
        try:
            yield
        except SQLAlchemyError as e:
            logger.error(
                f"Catalog store {operation} failed: {e}",
                extra={"operation": operation},
            )
            raise translate_store_error(e, operation) from e

    async def is_available(self) -> bool:
        """Liveness probe bounded by probe_timeout."""
        try:
            await asyncio.wait_for(
                self.db.execute(text("SELECT 1")), self.probe_timeout,
            )
            return True
        except Exception as e:
            logger.error(f"Catalog store probe failed: {e!r}")
            return False

    async def find_many(self, plant_filter: PlantFilter) -> list[Plant]:
        query = (
            select(Plant)
            .where(*build_conditions(plant_filter))
            .order_by(Plant.created_at.desc(), Plant.id.desc())
        )
        async with self._translate_errors("find_many"):
            result = await self.db.execute(query)
            return list(result.scalars().all())

    async def find_by_id(self, plant_id: PlantId) -> Plant | None:
        async with self._translate_errors("find_by_id"):
            return await self._load(plant_id)

    async def insert(self, new_plant: NewPlant) -> Plant:
        plant = Plant(
            name=new_plant.name,
            price=new_plant.price,
            quantity=new_plant.quantity,
            description=new_plant.description,
            image=new_plant.image,
            light=new_plant.light.value,
            category_entries=[
                PlantCategory(position=position, name=name)
                for position, name in enumerate(new_plant.categories)
            ],
        )
        async with self._translate_errors("insert"):
            self.db.add(plant)
            await self.db.commit()
        logger.info(
            f"Inserted plant '{plant.name}'", extra={"plant_id": str(plant.id)},
        )
        return plant

    async def distinct_categories(self) -> list[str]:
        query = (
            select(PlantCategory.name)
            .distinct()
            .order_by(PlantCategory.name)
        )
        async with self._translate_errors("distinct_categories"):
            result = await self.db.execute(query)
            return list(result.scalars().all())

    async def decrement_quantity_if_sufficient(
        self, plant_id: PlantId, amount: int,
    ) -> DecrementOutcome:
        """Atomically subtract `amount` when quantity >= amount."""
        stmt = (
            update(Plant)
            .where(Plant.id == plant_id, Plant.quantity >= amount)
            .values(
                quantity=Plant.quantity - amount,
                updated_at=datetime.now(timezone.utc),
            )
            .execution_options(synchronize_session=False)
        )
        async with self._translate_errors("decrement"):
            result = await self.db.execute(stmt)
            await self.db.commit()
            matched = result.rowcount
            plant = await self._load(plant_id)

        if matched == 1:
            return DecrementOutcome(DecrementStatus.PURCHASED, plant)
        if plant is None:
            return DecrementOutcome(DecrementStatus.NOT_FOUND)
        return DecrementOutcome(DecrementStatus.INSUFFICIENT_STOCK, plant)

    async def _load(self, plant_id: PlantId) -> Plant | None:
        result = await self.db.execute(
            select(Plant)
            .where(Plant.id == plant_id)
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()
