"""Infrastructure Layer: clocks and cross-cutting concerns.

Invariants:
    - Infrastructure never imports ledger domain logic beyond core types
"""
