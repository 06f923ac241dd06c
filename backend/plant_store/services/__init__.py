"""Services Layer — business operations orchestrating core logic and the catalog store.

Invariants:
    - Services return domain objects or raise PlantStoreError subclasses, nothing else
    - No shared mutable state between requests

Design Decisions:
    - Store injected through the CatalogStore protocol
"""
