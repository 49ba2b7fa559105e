"""Shared schema types: actor addresses and the mutation receipt.

Invariants:
    - Every address crossing the boundary is 0x + 40 hex, lowercased before reaching core
"""

from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, Field

from ecertify.core.domain_types import ACTOR_ID_PATTERN, to_actor_id
from ecertify.core.events import LedgerEvent

ActorAddress = Annotated[
    str, Field(pattern=ACTOR_ID_PATTERN), AfterValidator(to_actor_id),
]


class EventReceipt(BaseModel):
    """Returned by every successful mutation."""
    sequence: int
    kind: str
    timestamp: int
    payload: dict[str, Any]

    @classmethod
    def from_event(cls, event: LedgerEvent) -> "EventReceipt":
        return cls(**event.to_dict())
