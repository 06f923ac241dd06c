"""Plant ORM — persists one catalog listing with its stock quantity.

Invariants:
    - id is UUID primary key (client-side default)
    - quantity >= 0 and price >= 0 enforced by CHECK constraints as well as validation
    - categories exposed as an ordered list of strings via category_entries
    - updated_at refreshed on every ORM update; the purchase UPDATE sets it explicitly

Design Decisions:
    - Categories in a child table instead of a JSON column: intersection and
      substring search stay portable across PostgreSQL and SQLite
    - selectin loading for categories: no lazy loads in async context
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    String, Text, Integer, Float, DateTime, CheckConstraint, Index,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from plant_store.core.domain_types import DEFAULT_IMAGE_URL, LightLevel
from plant_store.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Plant(Base):
    """Plant listing — the sole catalog entity."""
    __tablename__ = "plants"
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_plants_quantity_non_negative"),
        CheckConstraint("price >= 0", name="ck_plants_price_non_negative"),
        Index("ix_plants_created_at", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    quantity: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    description: Mapped[str] = mapped_column(
        Text, nullable=False, default="",
    )
    image: Mapped[str] = mapped_column(
        Text, nullable=False, default=DEFAULT_IMAGE_URL,
    )
    light: Mapped[str] = mapped_column(
        String(10), nullable=False, default=LightLevel.MEDIUM.value,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=_utcnow, onupdate=_utcnow,
    )

    category_entries: Mapped[list["PlantCategory"]] = relationship(
        "PlantCategory", back_populates="plant",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="PlantCategory.position",
    )

    @property
    def categories(self) -> list[str]:
        return [entry.name for entry in self.category_entries]

    def __repr__(self):
        return f"<Plant(id={self.id}, name='{self.name}', quantity={self.quantity})>"
