"""Pydantic Schemas — request/response shapes for API endpoints.

Invariants:
    - Request schemas are deliberately loose; ordered validation lives in core/validate_plant
    - Response schemas serialize with camelCase keys

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
