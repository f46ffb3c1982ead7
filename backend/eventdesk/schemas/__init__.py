"""Pydantic Schemas - request/response shapes for API endpoints.

Invariants:
    - Schemas check transport shape only; record rules live in core/enforce_*
    - Responses are built from ORM rows via from_attributes

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
