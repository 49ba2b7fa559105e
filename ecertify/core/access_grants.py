"""Access Grant Manager: time-bounded disclosure of a student's records.

Invariants:
    - One expiry per (owner, grantee); re-granting overwrites it
    - A grant is active iff it exists and expiry > now
    - The linked institute always has access; that capability is computed, never stored
    - Expired grants are filtered out on read, not purged
    - Owner index per grantee changes in the same call as the grant map

Design Decisions:
    - has_access is a predicate over linkage OR grant: no second source of truth
"""

from dataclasses import dataclass
from typing import Iterable

from ecertify.core.domain_types import ActorId, Timestamp
from ecertify.core.enforce_input import require_positive_duration
from ecertify.core.errors import NotRegisteredError, SelfGrantError
from ecertify.core.identity_registry import IdentityRegistry


@dataclass(frozen=True)
class AccessStatus:
    """Access decision and stored expiry, read together."""
    has_access: bool
    expiry: Timestamp | None


class AccessGrantManager:

    def __init__(self, registry: IdentityRegistry) -> None:
        self._registry = registry
        self._expiries: dict[ActorId, dict[ActorId, Timestamp]] = {}
        self._owners_by_grantee: dict[ActorId, dict[ActorId, None]] = {}

    # ─── Reads ───────────────────────────────────────────────────

    def expiry_of(self, owner: ActorId, grantee: ActorId) -> Timestamp | None:
        return self._expiries.get(owner, {}).get(grantee)

    def has_access(
        self,
        owner: ActorId,
        requester: ActorId,
        now: Timestamp,
        linked_institute: ActorId | None,
    ) -> bool:
        if linked_institute is not None and requester == linked_institute:
            return True
        expiry = self.expiry_of(owner, requester)
        return expiry is not None and expiry > now

    def status_of(
        self,
        owner: ActorId,
        requester: ActorId,
        now: Timestamp,
        linked_institute: ActorId | None,
    ) -> AccessStatus:
        return AccessStatus(
            has_access=self.has_access(owner, requester, now, linked_institute),
            expiry=self.expiry_of(owner, requester),
        )

    def owners_accessible_by(
        self,
        requester: ActorId,
        now: Timestamp,
        linked_students: Iterable[ActorId],
    ) -> tuple[ActorId, ...]:
        """Owners whose records requester may read right now.

        Granting owners first (first-grant order), then students linked to
        requester that are not already listed.
        """
        owners = [
            owner for owner in self._owners_by_grantee.get(requester, ())
            if self._expiries[owner][requester] > now
        ]
        seen = set(owners)
        for student in linked_students:
            if student not in seen:
                owners.append(student)
                seen.add(student)
        return tuple(owners)

    # ─── Mutations ───────────────────────────────────────────────

    def grant(
        self, owner: ActorId, grantee: ActorId, duration: int, now: Timestamp,
    ) -> Timestamp:
        require_positive_duration(duration)
        if grantee == owner:
            raise SelfGrantError(owner)
        if not self._registry.is_registered(grantee):
            raise NotRegisteredError(grantee)

        expiry = Timestamp(now + duration)
        self._expiries.setdefault(owner, {})[grantee] = expiry
        self._owners_by_grantee.setdefault(grantee, {})[owner] = None
        return expiry

    def revoke(self, owner: ActorId, grantee: ActorId) -> bool:
        """Clear the grant. Returns whether a record existed; never raises."""
        grants = self._expiries.get(owner)
        if grants is None or grantee not in grants:
            return False
        del grants[grantee]
        if not grants:
            del self._expiries[owner]
        owners = self._owners_by_grantee[grantee]
        del owners[owner]
        if not owners:
            del self._owners_by_grantee[grantee]
        return True
