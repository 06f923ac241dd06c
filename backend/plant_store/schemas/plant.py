"""Plant Schemas — request bodies, plant representation, and the response envelope.

Invariants:
    - PlantCreate / PurchaseRequest accept any JSON value per field; core validation
      decides what is acceptable and in which order
    - PlantResponse reads ORM objects (from_attributes) and dumps camelCase keys
    - Every endpoint answers with {success, data?, message?}

Design Decisions:
    - serialization_alias over alias: attribute lookup stays snake_case on the ORM side
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class PlantCreate(BaseModel):
    """Create request body — shapes only, no value checks."""
    model_config = ConfigDict(extra="ignore")

    name: Any = None
    price: Any = None
    categories: Any = None
    quantity: Any = None
    description: Any = None
    image: Any = None
    light: Any = None


class PurchaseRequest(BaseModel):
    """Purchase request body — quantity defaults to 1 downstream."""
    model_config = ConfigDict(extra="ignore")

    quantity: Any = None


class PlantResponse(BaseModel):
    """Public plant representation."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    price: float
    categories: list[str]
    quantity: int
    description: str = ""
    image: str
    light: str
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")


def serialize_plant(plant: Any) -> dict:
    """ORM (or PlantLike) object -> JSON-ready camelCase dict."""
    return PlantResponse.model_validate(plant).model_dump(
        mode="json", by_alias=True,
    )


def envelope(data: Any = None, message: str | None = None) -> dict:
    """Success envelope; omits absent keys."""
    body: dict[str, Any] = {"success": True}
    if data is not None:
        body["data"] = data
    if message is not None:
        body["message"] = message
    return body
