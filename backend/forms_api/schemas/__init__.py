"""Pydantic Schemas — request/response shapes for API endpoints.

Invariants:
    - Request models validate at the system boundary (core/validation.py decodes into them)
    - Constraints declared here drive the validation messages

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence (ADR: DDD boundary)
"""
