"""Pydantic Schemas: request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (request bodies, responses)
    - Domain rules still live in core/; schemas only bound shapes and sizes

Design Decisions:
    - Separate from core dataclasses: schemas are API contracts, core types are ledger state
"""
