"""Ledger Facade: the only entry point to the record-and-access ledger.

Invariants:
    - Every public operation runs under one lock: mutations are totally ordered
    - A mutation either commits state + exactly one event, or raises and changes nothing
    - Reads return immutable snapshots of committed state only
    - "Current linked institute" is read from LinkageManager.institute_of, nowhere else
    - Time comes from the injected Clock, read once per operation

Design Decisions:
    - threading.Lock, not asyncio.Lock: operations never await, and the facade
      must stay safe when called from worker threads
    - Components validate before mutating; the facade only adds cross-component
      facts (linked institute, linked students) and the event
"""

import logging
import threading
from contextlib import contextmanager
from typing import Any, Iterator

from ecertify.core.access_grants import AccessStatus
from ecertify.core.certificate_store import (
    Certificate,
    IndexedCertificate,
    PendingUpload,
)
from ecertify.core.domain_types import ActorId, EventKind, Timestamp
from ecertify.core.errors import LedgerError, NotRegisteredError, UnauthorizedError
from ecertify.core.events import EventLog, LedgerEvent
from ecertify.core.identity_registry import Profile
from ecertify.core.ledger_protocols import Clock
from ecertify.core.ledger_state import LedgerState
from ecertify.core.linkage_manager import TransferRequest
from ecertify.infrastructure.clock import SystemClock

logger = logging.getLogger(__name__)


class Ledger:
    """Composes registry, linkage, certificates and grants behind one lock."""

    def __init__(
        self,
        clock: Clock | None = None,
        state: LedgerState | None = None,
        events: EventLog | None = None,
    ):
        self._clock = clock if clock is not None else SystemClock()
        self._state = state if state is not None else LedgerState()
        self._events = events if events is not None else EventLog()
        self._lock = threading.Lock()

    @contextmanager
    def _operation(self, name: str, caller: ActorId | None = None) -> Iterator[None]:
        with self._lock:
            try:
                yield
            except LedgerError as exc:
                exc.context.operation = exc.context.operation or name
                exc.context.actor = exc.context.actor or caller
                logger.info(
                    f"{name} rejected: {exc.message}",
                    extra={"operation": name, "actor": caller, "error_code": exc.code},
                )
                raise

    def _emit(
        self, kind: EventKind, now: Timestamp, caller: ActorId, payload: dict[str, Any],
    ) -> LedgerEvent:
        event = self._events.append(kind, now, payload)
        logger.info(
            f"{kind.value} committed",
            extra={
                "actor": caller, "event_kind": kind.value, "sequence": event.sequence,
            },
        )
        return event

    # ─── Identity ────────────────────────────────────────────────

    def create_profile(
        self, caller: ActorId, name: str, avatar_ref: str, is_institute: bool,
    ) -> LedgerEvent:
        with self._operation("create_profile", caller):
            profile = self._state.registry.create(caller, name, avatar_ref, is_institute)
            return self._emit(EventKind.PROFILE_CREATED, self._clock.now(), caller, {
                "actor": caller,
                "name": profile.name,
                "isInstitute": profile.is_institute,
            })

    def update_profile(self, caller: ActorId, name: str, avatar_ref: str) -> LedgerEvent:
        with self._operation("update_profile", caller):
            profile = self._state.registry.update(caller, name, avatar_ref)
            return self._emit(EventKind.PROFILE_UPDATED, self._clock.now(), caller, {
                "actor": caller,
                "name": profile.name,
                "avatarRef": profile.avatar_ref,
            })

    def get_profile(self, actor: ActorId) -> Profile:
        with self._lock:
            return self._state.registry.get(actor)

    # ─── Linkage ─────────────────────────────────────────────────

    def link_to_institute(self, caller: ActorId, institute: ActorId) -> LedgerEvent:
        with self._operation("link_to_institute", caller):
            self._state.linkage.link(caller, institute)
            return self._emit(EventKind.STUDENT_LINKED, self._clock.now(), caller, {
                "student": caller,
                "institute": institute,
            })

    def request_institute_change(
        self, caller: ActorId, new_institute: ActorId,
    ) -> LedgerEvent:
        with self._operation("request_institute_change", caller):
            self._state.linkage.request_change(caller, new_institute)
            return self._emit(EventKind.TRANSFER_REQUESTED, self._clock.now(), caller, {
                "student": caller,
                "newInstitute": new_institute,
            })

    def approve_institute_change(self, caller: ActorId, student: ActorId) -> LedgerEvent:
        with self._operation("approve_institute_change", caller):
            outcome = self._state.linkage.approve_change(caller, student)
            return self._emit(EventKind.TRANSFER_APPROVED, self._clock.now(), caller, {
                "student": outcome.student,
                "oldInstitute": outcome.old_institute,
                "newInstitute": outcome.new_institute,
            })

    def get_student_institute(self, student: ActorId) -> ActorId | None:
        with self._lock:
            return self._state.linkage.institute_of(student)

    def get_institute_students(self, institute: ActorId) -> tuple[ActorId, ...]:
        with self._lock:
            return self._state.linkage.students_of(institute)

    def get_transfer_request(self, student: ActorId) -> TransferRequest:
        with self._lock:
            return self._state.linkage.transfer_request(student)

    # ─── Certificates ────────────────────────────────────────────

    def upload_certificate(
        self, caller: ActorId, student: ActorId, content_ref: str, document_name: str,
    ) -> LedgerEvent:
        with self._operation("upload_certificate", caller):
            now = self._clock.now()
            entry = self._state.certificates.upload(
                caller, student, content_ref, document_name,
                linked_institute=self._state.linkage.institute_of(student),
                now=now,
            )
            return self._emit(EventKind.CERTIFICATE_UPLOADED, now, caller, {
                "student": student,
                "index": entry.index,
                "contentRef": entry.certificate.content_ref,
                "documentName": entry.certificate.document_name,
            })

    def verify_certificate(self, caller: ActorId, student: ActorId, index: int) -> LedgerEvent:
        with self._operation("verify_certificate", caller):
            self._state.certificates.verify(
                caller, student, index,
                linked_institute=self._state.linkage.institute_of(student),
            )
            return self._emit(EventKind.CERTIFICATE_VERIFIED, self._clock.now(), caller, {
                "student": student,
                "index": index,
                "verifier": caller,
            })

    def get_student_certificates(self, student: ActorId) -> tuple[Certificate, ...]:
        with self._lock:
            return self._state.certificates.all_for(student)

    def get_certificate(self, student: ActorId, index: int) -> Certificate:
        with self._operation("get_certificate"):
            return self._state.certificates.get(student, index)

    def get_verified_certificates(self, student: ActorId) -> tuple[IndexedCertificate, ...]:
        with self._lock:
            return self._state.certificates.verified_for(student)

    def view_verified_certificates(
        self, caller: ActorId, student: ActorId,
    ) -> tuple[IndexedCertificate, ...]:
        """Disclosure path: the student, their institute, or an active grantee."""
        with self._operation("view_verified_certificates", caller):
            if not self._state.registry.is_registered(student):
                raise NotRegisteredError(student)
            if caller != student and not self._has_access(student, caller):
                raise UnauthorizedError(
                    "No active access grant for this student",
                    student=student, caller=caller,
                )
            return self._state.certificates.verified_for(student)

    def get_pending_uploads(self, institute: ActorId) -> tuple[PendingUpload, ...]:
        with self._lock:
            students = self._state.linkage.students_of(institute)
            return self._state.certificates.pending_for(students)

    # ─── Access Grants ───────────────────────────────────────────

    def grant_access(self, caller: ActorId, grantee: ActorId, duration: int) -> LedgerEvent:
        with self._operation("grant_access", caller):
            now = self._clock.now()
            expiry = self._state.grants.grant(caller, grantee, duration, now)
            return self._emit(EventKind.ACCESS_GRANTED, now, caller, {
                "owner": caller,
                "grantee": grantee,
                "expiry": expiry,
            })

    def revoke_access(self, caller: ActorId, grantee: ActorId) -> LedgerEvent:
        with self._operation("revoke_access", caller):
            self._state.grants.revoke(caller, grantee)
            return self._emit(EventKind.ACCESS_REVOKED, self._clock.now(), caller, {
                "owner": caller,
                "grantee": grantee,
            })

    def has_access(self, owner: ActorId, requester: ActorId) -> bool:
        with self._lock:
            return self._has_access(owner, requester)

    def _has_access(self, owner: ActorId, requester: ActorId) -> bool:
        return self._state.grants.has_access(
            owner, requester, self._clock.now(),
            linked_institute=self._state.linkage.institute_of(owner),
        )

    def get_students_with_access(self, requester: ActorId) -> tuple[ActorId, ...]:
        with self._lock:
            return self._state.grants.owners_accessible_by(
                requester, self._clock.now(),
                linked_students=self._state.linkage.students_of(requester),
            )

    def get_access_expiry(self, owner: ActorId, grantee: ActorId) -> Timestamp | None:
        with self._lock:
            return self._state.grants.expiry_of(owner, grantee)

    def get_access_status(self, owner: ActorId, requester: ActorId) -> AccessStatus:
        """has_access and get_access_expiry taken from one snapshot."""
        with self._lock:
            return self._state.grants.status_of(
                owner, requester, self._clock.now(),
                linked_institute=self._state.linkage.institute_of(owner),
            )

    # ─── Event Feed ──────────────────────────────────────────────

    def events_since(self, after: int = -1, limit: int | None = None) -> list[LedgerEvent]:
        with self._lock:
            return self._events.events_since(after, limit)

    @property
    def last_sequence(self) -> int:
        with self._lock:
            return self._events.last_sequence

    def linkage_violations(self) -> list[str]:
        """Bidirectional membership check, exposed for audits and tests."""
        with self._lock:
            return self._state.linkage.consistency_violations()
