"""Event Feed: polling subscription over the append-only event log.

Invariants:
    - ?after=N returns only events with sequence > N, oldest first
    - Page size capped by settings.event_page_size
"""

from fastapi import APIRouter, Query

from ecertify.api.dependencies import LedgerDep
from ecertify.config import get_settings
from ecertify.schemas.common import EventReceipt
from ecertify.schemas.event import EventPage

router = APIRouter(prefix="/api/v1/events", tags=["events"])


@router.get("", response_model=EventPage)
async def list_events(
    ledger: LedgerDep,
    after: int = Query(-1, ge=-1),
    limit: int | None = Query(None, ge=1),
):
    page_size = get_settings().event_page_size
    limit = min(limit or page_size, page_size)
    events = ledger.events_since(after, limit)
    return EventPage(
        events=[EventReceipt.from_event(e) for e in events],
        last_sequence=ledger.last_sequence,
    )
