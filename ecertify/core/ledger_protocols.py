"""Boundary Protocols: contracts between the ledger core and its shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - Time is read through Clock only, so tests can simulate elapsed time

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
"""

from typing import Protocol

from ecertify.core.domain_types import Timestamp


class Clock(Protocol):
    """Source of the current ledger time, in whole Unix seconds."""
    def now(self) -> Timestamp: ...
