"""Event Schemas: event feed page."""

from pydantic import BaseModel

from ecertify.schemas.common import EventReceipt


class EventPage(BaseModel):
    events: list[EventReceipt]
    last_sequence: int
