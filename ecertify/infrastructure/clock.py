"""Clocks: concrete time sources satisfying core.ledger_protocols.Clock.

Invariants:
    - now() returns whole Unix seconds
    - ManualClock never moves backwards unless set() is called explicitly
"""

import time

from ecertify.core.domain_types import Timestamp


class SystemClock:
    """Wall-clock time for the running service."""

    def now(self) -> Timestamp:
        return Timestamp(int(time.time()))


class ManualClock:
    """Caller-driven time, used to simulate grant expiry."""

    def __init__(self, start: int = 1_700_000_000):
        self._now = start

    def now(self) -> Timestamp:
        return Timestamp(self._now)

    def advance(self, seconds: int) -> Timestamp:
        self._now += seconds
        return Timestamp(self._now)

    def set(self, timestamp: int) -> None:
        self._now = timestamp
