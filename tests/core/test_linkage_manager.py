"""Linkage Manager: link, transfer request and approval.

Tests cover:
    - link preconditions in order: OnlyStudent, InvalidTarget, AlreadyLinked
    - request_change: not linked, same institute, invalid target, last request wins
    - approve_change: only the current institute, requires a pending request
    - bidirectional membership holds after every call
"""

import pytest

from ecertify.core.errors import (
    AlreadyLinkedError, InvalidTargetError, NoPendingRequestError,
    OnlyStudentError, SameInstituteError, UnauthorizedError,
)
from ecertify.core.identity_registry import IdentityRegistry
from ecertify.core.linkage_manager import NO_TRANSFER_REQUEST, LinkageManager
from tests.actors import ALICE, BOB, MIT, RECRUITER, STANFORD, STRANGER


@pytest.fixture
def registry():
    registry = IdentityRegistry()
    registry.create(ALICE, "Alice", "", False)
    registry.create(BOB, "Bob", "", False)
    registry.create(RECRUITER, "Recruiter", "", False)
    registry.create(MIT, "MIT", "", True)
    registry.create(STANFORD, "Stanford", "", True)
    return registry


@pytest.fixture
def linkage(registry):
    return LinkageManager(registry)


# ─── link ────────────────────────────────────────────────────────

def test_link_sets_both_directions(linkage):
    linkage.link(ALICE, MIT)
    assert linkage.institute_of(ALICE) == MIT
    assert linkage.students_of(MIT) == (ALICE,)
    assert linkage.consistency_violations() == []


def test_students_listed_in_link_order(linkage):
    linkage.link(BOB, MIT)
    linkage.link(ALICE, MIT)
    assert linkage.students_of(MIT) == (BOB, ALICE)


def test_institute_cannot_link(linkage):
    with pytest.raises(OnlyStudentError):
        linkage.link(MIT, STANFORD)


def test_unregistered_caller_cannot_link(linkage):
    with pytest.raises(OnlyStudentError):
        linkage.link(STRANGER, MIT)


def test_link_to_student_is_invalid_target(linkage):
    with pytest.raises(InvalidTargetError):
        linkage.link(ALICE, RECRUITER)


def test_link_to_unregistered_is_invalid_target(linkage):
    with pytest.raises(InvalidTargetError):
        linkage.link(ALICE, STRANGER)
    assert linkage.institute_of(ALICE) is None


def test_double_link_rejected_and_state_kept(linkage):
    linkage.link(ALICE, MIT)
    with pytest.raises(AlreadyLinkedError):
        linkage.link(ALICE, STANFORD)
    assert linkage.institute_of(ALICE) == MIT
    assert linkage.students_of(STANFORD) == ()


# ─── request_change ─────────────────────────────────────────────

def test_request_change_records_pending(linkage):
    linkage.link(ALICE, MIT)
    request = linkage.request_change(ALICE, STANFORD)
    assert request.pending
    assert linkage.transfer_request(ALICE).target_institute == STANFORD


def test_request_change_requires_link(linkage):
    with pytest.raises(UnauthorizedError):
        linkage.request_change(ALICE, STANFORD)


def test_request_change_to_current_institute(linkage):
    linkage.link(ALICE, MIT)
    with pytest.raises(SameInstituteError):
        linkage.request_change(ALICE, MIT)


def test_request_change_to_non_institute(linkage):
    linkage.link(ALICE, MIT)
    with pytest.raises(InvalidTargetError):
        linkage.request_change(ALICE, BOB)
    assert linkage.transfer_request(ALICE) is NO_TRANSFER_REQUEST


def test_request_change_by_institute(linkage):
    with pytest.raises(OnlyStudentError):
        linkage.request_change(MIT, STANFORD)


def test_newer_request_overwrites_older(linkage, registry):
    linkage.link(ALICE, MIT)
    linkage.request_change(ALICE, STANFORD)
    registry.create(STRANGER, "Harvard", "", True)
    linkage.request_change(ALICE, STRANGER)
    assert linkage.transfer_request(ALICE).target_institute == STRANGER


# ─── approve_change ─────────────────────────────────────────────

def test_approve_moves_student(linkage):
    linkage.link(ALICE, MIT)
    linkage.request_change(ALICE, STANFORD)
    outcome = linkage.approve_change(MIT, ALICE)
    assert (outcome.old_institute, outcome.new_institute) == (MIT, STANFORD)
    assert linkage.institute_of(ALICE) == STANFORD
    assert linkage.students_of(MIT) == ()
    assert linkage.students_of(STANFORD) == (ALICE,)
    assert linkage.transfer_request(ALICE) is NO_TRANSFER_REQUEST
    assert linkage.consistency_violations() == []


def test_new_institute_cannot_approve(linkage):
    linkage.link(ALICE, MIT)
    linkage.request_change(ALICE, STANFORD)
    with pytest.raises(UnauthorizedError):
        linkage.approve_change(STANFORD, ALICE)
    assert linkage.institute_of(ALICE) == MIT


def test_student_cannot_approve_own_transfer(linkage):
    linkage.link(ALICE, MIT)
    linkage.request_change(ALICE, STANFORD)
    with pytest.raises(UnauthorizedError):
        linkage.approve_change(ALICE, ALICE)


def test_approve_unlinked_student_is_unauthorized(linkage):
    with pytest.raises(UnauthorizedError):
        linkage.approve_change(MIT, ALICE)


def test_approve_without_request(linkage):
    linkage.link(ALICE, MIT)
    with pytest.raises(NoPendingRequestError):
        linkage.approve_change(MIT, ALICE)


def test_second_approval_fails_after_request_cleared(linkage):
    linkage.link(ALICE, MIT)
    linkage.request_change(ALICE, STANFORD)
    linkage.approve_change(MIT, ALICE)
    with pytest.raises(UnauthorizedError):
        linkage.approve_change(MIT, ALICE)
    with pytest.raises(NoPendingRequestError):
        linkage.approve_change(STANFORD, ALICE)


def test_transfer_keeps_other_students(linkage):
    linkage.link(ALICE, MIT)
    linkage.link(BOB, MIT)
    linkage.request_change(ALICE, STANFORD)
    linkage.approve_change(MIT, ALICE)
    assert linkage.students_of(MIT) == (BOB,)
    assert linkage.consistency_violations() == []
