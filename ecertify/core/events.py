"""Event Log: append-only, externally observable record of committed mutations.

Invariants:
    - Exactly one event per successful mutating operation, none for rejections
    - Sequence numbers start at 0 and are gap-free
    - Events are immutable once appended; the log is never truncated
    - Appended by the facade inside the same locked unit as the state change

Design Decisions:
    - Explicit ordered log, polled with events_since(): observers pull, the
      ledger never calls back into foreign code while holding its lock
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterator, Mapping

from ecertify.core.domain_types import EventKind, Timestamp


@dataclass(frozen=True)
class LedgerEvent:
    sequence: int
    kind: EventKind
    timestamp: Timestamp
    payload: Mapping[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "sequence": self.sequence,
            "kind": self.kind.value,
            "timestamp": self.timestamp,
            "payload": dict(self.payload),
        }


class EventLog:
    """Ordered, append-only event storage."""

    def __init__(self) -> None:
        self._events: list[LedgerEvent] = []

    def append(
        self, kind: EventKind, timestamp: Timestamp, payload: dict[str, Any],
    ) -> LedgerEvent:
        event = LedgerEvent(
            sequence=len(self._events),
            kind=kind,
            timestamp=timestamp,
            payload=MappingProxyType(dict(payload)),
        )
        self._events.append(event)
        return event

    def events_since(self, after: int = -1, limit: int | None = None) -> list[LedgerEvent]:
        """Committed events with sequence > after, oldest first."""
        start = max(after + 1, 0)
        end = None if limit is None else start + limit
        return self._events[start:end]

    @property
    def last_sequence(self) -> int:
        """Sequence of the newest event, -1 when the log is empty."""
        return len(self._events) - 1

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[LedgerEvent]:
        return iter(list(self._events))
