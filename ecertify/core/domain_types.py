"""Domain Types: rich types that replace bare primitives across the ledger.

Invariants:
    - ActorId is the only authentication token; equality is plain string equality
    - Role is a closed two-variant tag, checked explicitly at authorization points
    - Timestamps are integer Unix seconds
    - All event names encoded as an Enum, never raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders (ADR: event payloads are JSON)
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ActorId = NewType("ActorId", str)
ContentRef = NewType("ContentRef", str)      # content-addressed hash, bytes live elsewhere
Timestamp = NewType("Timestamp", int)        # Unix seconds

# 20-byte address, hex encoded with 0x prefix
ACTOR_ID_PATTERN: str = r"^0x[0-9a-fA-F]{40}$"


def to_actor_id(raw: str) -> ActorId:
    """Canonical form of an address: lowercase hex. Format is checked at the boundary."""
    return ActorId(raw.strip().lower())


# ─── Enums ───────────────────────────────────────────────────────

class Role(str, Enum):
    """Actor role, fixed when the profile is created."""
    STUDENT = "student"
    INSTITUTE = "institute"

    @classmethod
    def from_flag(cls, is_institute: bool) -> "Role":
        return cls.INSTITUTE if is_institute else cls.STUDENT


class EventKind(str, Enum):
    """One event kind per successful mutating operation."""
    PROFILE_CREATED = "ProfileCreated"
    PROFILE_UPDATED = "ProfileUpdated"
    STUDENT_LINKED = "StudentLinked"
    TRANSFER_REQUESTED = "TransferRequested"
    TRANSFER_APPROVED = "TransferApproved"
    CERTIFICATE_UPLOADED = "CertificateUploaded"
    CERTIFICATE_VERIFIED = "CertificateVerified"
    ACCESS_GRANTED = "AccessGranted"
    ACCESS_REVOKED = "AccessRevoked"
