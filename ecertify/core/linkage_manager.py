"""Linkage Manager: student <-> institute relationship and two-phase transfer.

Invariants:
    - A student has at most one current institute
    - student in students_of(i)  <=>  institute_of(student) == i
    - At most one transfer request per student; a newer request overwrites the older
    - Only the CURRENT institute approves; approval clears the request
    - Forward map and reverse set change together, inside one method call

Design Decisions:
    - Reverse set stored as dict[ActorId, None]: insertion-ordered set, stable listing
    - No rejection path for transfers: a request ends by approval or by being superseded
"""

from dataclasses import dataclass

from ecertify.core.domain_types import ActorId
from ecertify.core.errors import (
    AlreadyLinkedError,
    InvalidTargetError,
    NoPendingRequestError,
    OnlyStudentError,
    SameInstituteError,
    UnauthorizedError,
)
from ecertify.core.identity_registry import IdentityRegistry


@dataclass(frozen=True)
class TransferRequest:
    target_institute: ActorId | None = None
    pending: bool = False


NO_TRANSFER_REQUEST = TransferRequest()


@dataclass(frozen=True)
class TransferOutcome:
    student: ActorId
    old_institute: ActorId
    new_institute: ActorId


class LinkageManager:
    """Tracks the current institute of every student and pending transfers."""

    def __init__(self, registry: IdentityRegistry) -> None:
        self._registry = registry
        self._student_institute: dict[ActorId, ActorId] = {}
        self._institute_students: dict[ActorId, dict[ActorId, None]] = {}
        self._transfer_requests: dict[ActorId, TransferRequest] = {}

    # ─── Reads ───────────────────────────────────────────────────

    def institute_of(self, student: ActorId) -> ActorId | None:
        """The single accessor every cross-component authorization rule uses."""
        return self._student_institute.get(student)

    def students_of(self, institute: ActorId) -> tuple[ActorId, ...]:
        return tuple(self._institute_students.get(institute, ()))

    def transfer_request(self, student: ActorId) -> TransferRequest:
        return self._transfer_requests.get(student, NO_TRANSFER_REQUEST)

    def consistency_violations(self) -> list[str]:
        """Every break of the bidirectional membership rule (empty when sound)."""
        problems = []
        for student, institute in self._student_institute.items():
            if student not in self._institute_students.get(institute, {}):
                problems.append(f"{student} -> {institute} missing from reverse set")
        for institute, students in self._institute_students.items():
            for student in students:
                if self._student_institute.get(student) != institute:
                    problems.append(f"{student} listed under {institute} but linked elsewhere")
        return problems

    # ─── Mutations ───────────────────────────────────────────────

    def link(self, student: ActorId, institute: ActorId) -> None:
        self._require_student(student)
        self._require_institute(institute)
        current = self._student_institute.get(student)
        if current is not None:
            raise AlreadyLinkedError(student, current)

        self._student_institute[student] = institute
        self._institute_students.setdefault(institute, {})[student] = None

    def request_change(self, student: ActorId, new_institute: ActorId) -> TransferRequest:
        self._require_student(student)
        current = self._student_institute.get(student)
        if current is None:
            raise UnauthorizedError(
                "Student is not linked to any institute", student=student,
            )
        if new_institute == current:
            raise SameInstituteError(new_institute)
        self._require_institute(new_institute)

        request = TransferRequest(target_institute=new_institute, pending=True)
        self._transfer_requests[student] = request
        return request

    def approve_change(self, caller: ActorId, student: ActorId) -> TransferOutcome:
        current = self._student_institute.get(student)
        if current is None or caller != current:
            raise UnauthorizedError(
                "Only the linked institute can approve a transfer",
                student=student, caller=caller,
            )
        request = self._transfer_requests.get(student)
        if request is None or not request.pending or request.target_institute is None:
            raise NoPendingRequestError(student)

        new_institute = request.target_institute
        del self._institute_students[current][student]
        if not self._institute_students[current]:
            del self._institute_students[current]
        self._institute_students.setdefault(new_institute, {})[student] = None
        self._student_institute[student] = new_institute
        del self._transfer_requests[student]
        return TransferOutcome(student, current, new_institute)

    # ─── Guards ──────────────────────────────────────────────────

    def _require_student(self, actor: ActorId) -> None:
        if not self._registry.is_student(actor):
            raise OnlyStudentError(actor)

    def _require_institute(self, actor: ActorId) -> None:
        if not self._registry.is_institute(actor):
            raise InvalidTargetError(actor)
