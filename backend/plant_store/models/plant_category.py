"""PlantCategory ORM — one normalized category of a plant, in listing order.

Invariants:
    - Always belongs to a Plant (plant_id FK, ON DELETE CASCADE)
    - name is lowercase and trimmed before it reaches this table
    - (plant_id, position) is unique: preserves the submitted category order

Design Decisions:
    - Indexed name: category intersection and distinct enumeration hit the index
"""

import uuid

from sqlalchemy import String, Integer, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from plant_store.db.base import Base


class PlantCategory(Base):
    """Category label attached to a plant."""
    __tablename__ = "plant_categories"
    __table_args__ = (
        UniqueConstraint("plant_id", "position", name="uq_plant_categories_position"),
        Index("ix_plant_categories_name", "name"),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    plant_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("plants.id", ondelete="CASCADE"),
        nullable=False,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    plant: Mapped["Plant"] = relationship(
        "Plant", back_populates="category_entries",
    )
