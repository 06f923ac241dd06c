"""Plant Routes — catalog listing, lookup, creation, purchase, and category enumeration.

Invariants:
    - Routes never contain business logic (delegate to InventoryService)
    - Responses use the envelope {success, data?, message?}; errors are raised and
      rendered by the global handlers
    - /plants/meta/categories is a fixed path and never reaches the {plant_id} handlers

Design Decisions:
    - plant_id taken as str: malformed ids must yield 404, not a 422/400 from path parsing
    - category accepted as a repeatable query param; comma-joined values split in core
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from plant_store.config import get_settings
from plant_store.infrastructure.catalog_store import SqlCatalogStore
from plant_store.infrastructure.database import get_db
from plant_store.schemas.plant import (
    PlantCreate, PurchaseRequest, serialize_plant, envelope,
)
from plant_store.services.inventory_service import InventoryService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/plants", tags=["plants"])


def get_inventory_service(
    db: AsyncSession = Depends(get_db),
) -> InventoryService:
    """FastAPI dependency: service bound to the request's DB session."""
    settings = get_settings()
    store = SqlCatalogStore(
        db, probe_timeout=settings.store_probe_timeout_seconds,
    )
    return InventoryService(store)


@router.get("")
async def list_plants(
    search: str | None = Query(None),
    category: list[str] | None = Query(None),
    in_stock: str | None = Query(None, alias="inStock"),
    service: InventoryService = Depends(get_inventory_service),
):
    """List plants with optional search, category and stock filters."""
    plants = await service.list_plants(search, category, in_stock)
    return envelope([serialize_plant(p) for p in plants])


@router.get("/meta/categories")
async def list_categories(
    service: InventoryService = Depends(get_inventory_service),
):
    """Distinct categories in use, for filter dropdowns."""
    return envelope(await service.list_categories())


@router.get("/{plant_id}")
async def get_plant(
    plant_id: str,
    service: InventoryService = Depends(get_inventory_service),
):
    plant = await service.get_plant(plant_id)
    return envelope(serialize_plant(plant))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_plant(
    body: PlantCreate,
    service: InventoryService = Depends(get_inventory_service),
):
    """Create a plant listing (admin)."""
    plant = await service.create_plant(body.model_dump())
    return envelope(serialize_plant(plant))


@router.post("/{plant_id}/purchase")
async def purchase_plant(
    plant_id: str,
    body: PurchaseRequest | None = None,
    service: InventoryService = Depends(get_inventory_service),
):
    """Buy `quantity` units (default 1) of a plant."""
    quantity = body.quantity if body else None
    result = await service.purchase(plant_id, quantity)
    return envelope(serialize_plant(result.plant), result.message)
