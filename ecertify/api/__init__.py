"""API Layer: FastAPI routes, caller identity and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Routes never decide authorization; the ledger facade does

Design Decisions:
    - Thin routes delegate to the Ledger facade (ADR: impureim sandwich)
"""
