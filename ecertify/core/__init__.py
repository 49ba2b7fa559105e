"""Core Layer: pure ledger logic, no IO, no async, no framework imports.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/ or schemas/
    - Components validate every precondition before touching their maps
    - Time and caller identity always arrive as arguments

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
"""
