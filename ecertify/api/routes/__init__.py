"""Route Modules: one file per ledger resource.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes never contain business logic (delegate to the Ledger facade)
"""
