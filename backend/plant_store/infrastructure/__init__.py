"""Infrastructure Layer — database access and cross-cutting concerns.

Invariants:
    - Store errors leave this layer only as PlantStoreError subclasses
    - Probes are bounded by a timeout (fast fail, never hang)

Design Decisions:
    - SqlCatalogStore implements core.repository_protocols.CatalogStore
"""
