"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Plant is the aggregate root; PlantCategory rows only exist under a plant

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from plant_store.models.plant import Plant  # noqa: F401
from plant_store.models.plant_category import PlantCategory  # noqa: F401
