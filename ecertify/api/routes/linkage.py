"""Linkage Routes: link to an institute, request and approve transfers."""

import logging

from fastapi import APIRouter

from ecertify.api.dependencies import ActorPath, CallerDep, LedgerDep
from ecertify.core.domain_types import to_actor_id
from ecertify.schemas.common import EventReceipt
from ecertify.schemas.linkage import (
    InstituteStudents,
    LinkRequest,
    StudentLinkage,
    TransferRequestBody,
    TransferStatus,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/linkage", tags=["linkage"])


@router.post("/link", response_model=EventReceipt)
async def link_to_institute(body: LinkRequest, caller: CallerDep, ledger: LedgerDep):
    return EventReceipt.from_event(ledger.link_to_institute(caller, body.institute))


@router.post("/transfer", response_model=EventReceipt)
async def request_institute_change(
    body: TransferRequestBody, caller: CallerDep, ledger: LedgerDep,
):
    event = ledger.request_institute_change(caller, body.new_institute)
    return EventReceipt.from_event(event)


@router.post("/transfer/{student}/approve", response_model=EventReceipt)
async def approve_institute_change(
    student: ActorPath, caller: CallerDep, ledger: LedgerDep,
):
    event = ledger.approve_institute_change(caller, to_actor_id(student))
    return EventReceipt.from_event(event)


@router.get("/students/{student}", response_model=StudentLinkage)
async def get_student_linkage(student: ActorPath, ledger: LedgerDep):
    student_id = to_actor_id(student)
    request = ledger.get_transfer_request(student_id)
    return StudentLinkage(
        student=student_id,
        institute=ledger.get_student_institute(student_id),
        transfer=TransferStatus(
            target_institute=request.target_institute, pending=request.pending,
        ),
    )


@router.get("/institutes/{institute}/students", response_model=InstituteStudents)
async def get_institute_students(institute: ActorPath, ledger: LedgerDep):
    institute_id = to_actor_id(institute)
    return InstituteStudents(
        institute=institute_id,
        students=list(ledger.get_institute_students(institute_id)),
    )
