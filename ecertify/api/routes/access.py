"""Access Routes: grant, revoke and query time-bounded access.

Invariants:
    - Grants are always issued by the caller for the caller's own records
    - Durations above settings.max_grant_duration_seconds are rejected before the ledger
"""

import logging

from fastapi import APIRouter

from ecertify.api.dependencies import ActorPath, CallerDep, LedgerDep
from ecertify.config import get_settings
from ecertify.core.domain_types import to_actor_id
from ecertify.core.errors import InvalidInputError
from ecertify.schemas.access import AccessCheck, AccessibleStudents, GrantRequest
from ecertify.schemas.common import EventReceipt

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/access", tags=["access"])


@router.post("/grants", response_model=EventReceipt)
async def grant_access(body: GrantRequest, caller: CallerDep, ledger: LedgerDep):
    limit = get_settings().max_grant_duration_seconds
    if body.duration > limit:
        raise InvalidInputError(f"Duration cannot exceed {limit} seconds", "duration")
    return EventReceipt.from_event(
        ledger.grant_access(caller, body.grantee, body.duration),
    )


@router.delete("/grants/{grantee}", response_model=EventReceipt)
async def revoke_access(grantee: ActorPath, caller: CallerDep, ledger: LedgerDep):
    return EventReceipt.from_event(ledger.revoke_access(caller, to_actor_id(grantee)))


@router.get("/granted-to/{requester}", response_model=AccessibleStudents)
async def get_students_with_access(requester: ActorPath, ledger: LedgerDep):
    requester_id = to_actor_id(requester)
    return AccessibleStudents(
        requester=requester_id,
        students=list(ledger.get_students_with_access(requester_id)),
    )


@router.get("/{owner}/{requester}", response_model=AccessCheck)
async def has_access(owner: ActorPath, requester: ActorPath, ledger: LedgerDep):
    owner_id, requester_id = to_actor_id(owner), to_actor_id(requester)
    status = ledger.get_access_status(owner_id, requester_id)
    return AccessCheck(
        owner=owner_id,
        requester=requester_id,
        has_access=status.has_access,
        expiry=status.expiry,
    )
