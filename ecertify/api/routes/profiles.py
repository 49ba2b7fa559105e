"""Profile Routes: registration, update and lookup.

Invariants:
    - A caller can only create or update its own profile
    - Lookup of an unknown actor returns exists=false with 200, not 404
"""

import logging

from fastapi import APIRouter, status

from ecertify.api.dependencies import ActorPath, CallerDep, LedgerDep
from ecertify.core.domain_types import to_actor_id
from ecertify.schemas.common import EventReceipt
from ecertify.schemas.profile import ProfileCreate, ProfileResponse, ProfileUpdate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/profiles", tags=["profiles"])


@router.post(
    "", response_model=EventReceipt, status_code=status.HTTP_201_CREATED,
)
async def create_profile(body: ProfileCreate, caller: CallerDep, ledger: LedgerDep):
    event = ledger.create_profile(caller, body.name, body.avatar_ref, body.is_institute)
    return EventReceipt.from_event(event)


@router.put("/me", response_model=EventReceipt)
async def update_profile(body: ProfileUpdate, caller: CallerDep, ledger: LedgerDep):
    event = ledger.update_profile(caller, body.name, body.avatar_ref)
    return EventReceipt.from_event(event)


@router.get("/{actor}", response_model=ProfileResponse)
async def get_profile(actor: ActorPath, ledger: LedgerDep):
    actor_id = to_actor_id(actor)
    return ProfileResponse.from_profile(actor_id, ledger.get_profile(actor_id))
