"""Certificate Store: append-only, per-student certificate records.

Invariants:
    - Indexes start at 0 per student, are assigned sequentially, never reused or reordered
    - Records are never removed; the only state change is pending -> verified
    - verified=True at upload iff the uploader is the student's linked institute
    - Only the linked institute verifies, and only once
    - Linkage is never read here: the facade passes linked_institute in

Design Decisions:
    - Frozen records replaced on verify: callers holding a snapshot never see it change
    - Pending view computed from the records of the linked students, not stored
"""

from dataclasses import dataclass, replace
from typing import Iterable

from ecertify.core.domain_types import ActorId, ContentRef, Timestamp
from ecertify.core.enforce_input import require_text
from ecertify.core.errors import (
    AlreadyVerifiedError,
    OutOfRangeError,
    UnauthorizedError,
)


@dataclass(frozen=True)
class Certificate:
    content_ref: ContentRef
    document_name: str
    uploader: ActorId
    verified: bool
    uploaded_at: Timestamp


@dataclass(frozen=True)
class IndexedCertificate:
    """A certificate together with its position in the student's sequence."""
    index: int
    certificate: Certificate


@dataclass(frozen=True)
class PendingUpload:
    student: ActorId
    index: int


class CertificateStore:

    def __init__(self) -> None:
        self._records: dict[ActorId, list[Certificate]] = {}

    # ─── Reads ───────────────────────────────────────────────────

    def count(self, student: ActorId) -> int:
        return len(self._records.get(student, ()))

    def all_for(self, student: ActorId) -> tuple[Certificate, ...]:
        return tuple(self._records.get(student, ()))

    def get(self, student: ActorId, index: int) -> Certificate:
        records = self._records.get(student, [])
        if isinstance(index, bool) or not 0 <= index < len(records):
            raise OutOfRangeError(student, index, len(records))
        return records[index]

    def verified_for(self, student: ActorId) -> tuple[IndexedCertificate, ...]:
        return tuple(
            IndexedCertificate(i, cert)
            for i, cert in enumerate(self._records.get(student, ()))
            if cert.verified
        )

    def pending_for(self, students: Iterable[ActorId]) -> tuple[PendingUpload, ...]:
        """Unverified records of the given students, student order then upload order."""
        return tuple(
            PendingUpload(student, i)
            for student in students
            for i, cert in enumerate(self._records.get(student, ()))
            if not cert.verified
        )

    # ─── Mutations ───────────────────────────────────────────────

    def upload(
        self,
        caller: ActorId,
        student: ActorId,
        content_ref: str,
        document_name: str,
        linked_institute: ActorId | None,
        now: Timestamp,
    ) -> IndexedCertificate:
        require_text(content_ref, "content_ref")
        require_text(document_name, "document_name")
        by_institute = linked_institute is not None and caller == linked_institute
        if caller != student and not by_institute:
            raise UnauthorizedError(
                "Only the student or their linked institute can upload",
                student=student, caller=caller,
            )

        records = self._records.setdefault(student, [])
        cert = Certificate(
            content_ref=ContentRef(content_ref),
            document_name=document_name,
            uploader=caller,
            verified=by_institute,
            uploaded_at=now,
        )
        records.append(cert)
        return IndexedCertificate(len(records) - 1, cert)

    def verify(
        self,
        caller: ActorId,
        student: ActorId,
        index: int,
        linked_institute: ActorId | None,
    ) -> Certificate:
        cert = self.get(student, index)
        if linked_institute is None or caller != linked_institute:
            raise UnauthorizedError(
                "Only the linked institute can verify certificates",
                student=student, caller=caller,
            )
        if cert.verified:
            raise AlreadyVerifiedError(student, index)

        verified = replace(cert, verified=True)
        self._records[student][index] = verified
        return verified
