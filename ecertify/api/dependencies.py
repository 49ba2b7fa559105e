"""Request Dependencies: ledger instance and authenticated caller.

Invariants:
    - One Ledger per application, held on app.state.ledger
    - Caller identity comes only from the configured header, never from the body
    - Addresses are lowercased before they reach the ledger
"""

import re
from typing import Annotated

from fastapi import Depends, Path, Request

from ecertify.config import get_settings
from ecertify.core.domain_types import ACTOR_ID_PATTERN, ActorId, to_actor_id
from ecertify.core.errors import MissingIdentityError
from ecertify.services.ledger import Ledger

_ACTOR_RE = re.compile(ACTOR_ID_PATTERN)


def get_ledger(request: Request) -> Ledger:
    return request.app.state.ledger


def get_caller(request: Request) -> ActorId:
    """Trust the identity header set by the upstream wallet gateway."""
    header = get_settings().actor_header
    raw = (request.headers.get(header) or "").strip()
    if not _ACTOR_RE.match(raw):
        raise MissingIdentityError(header)
    return to_actor_id(raw)


LedgerDep = Annotated[Ledger, Depends(get_ledger)]
CallerDep = Annotated[ActorId, Depends(get_caller)]
ActorPath = Annotated[str, Path(pattern=ACTOR_ID_PATTERN)]
