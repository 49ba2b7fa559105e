"""Certificate Routes: upload, verify, listings and the pending queue.

Invariants:
    - The full listing is public (pending + verified); the verified listing is
      the disclosure path and requires the student, the institute or a grant
    - content_ref is an opaque reference obtained from the content store beforehand
"""

import logging

from fastapi import APIRouter, status

from ecertify.api.dependencies import ActorPath, CallerDep, LedgerDep
from ecertify.core.domain_types import to_actor_id
from ecertify.schemas.certificate import (
    CertificateList,
    CertificateUpload,
    CertificateView,
    PendingUploadList,
    PendingUploadView,
)
from ecertify.schemas.common import EventReceipt

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["certificates"])


@router.post(
    "/students/{student}/certificates",
    response_model=EventReceipt, status_code=status.HTTP_201_CREATED,
)
async def upload_certificate(
    student: ActorPath, body: CertificateUpload, caller: CallerDep, ledger: LedgerDep,
):
    event = ledger.upload_certificate(
        caller, to_actor_id(student), body.content_ref, body.document_name,
    )
    return EventReceipt.from_event(event)


@router.post(
    "/students/{student}/certificates/{index}/verify", response_model=EventReceipt,
)
async def verify_certificate(
    student: ActorPath, index: int, caller: CallerDep, ledger: LedgerDep,
):
    event = ledger.verify_certificate(caller, to_actor_id(student), index)
    return EventReceipt.from_event(event)


@router.get("/students/{student}/certificates", response_model=CertificateList)
async def get_student_certificates(student: ActorPath, ledger: LedgerDep):
    student_id = to_actor_id(student)
    records = ledger.get_student_certificates(student_id)
    return CertificateList(
        student=student_id,
        certificates=[
            CertificateView.from_record(i, cert) for i, cert in enumerate(records)
        ],
    )


@router.get(
    "/students/{student}/certificates/verified", response_model=CertificateList,
)
async def view_verified_certificates(
    student: ActorPath, caller: CallerDep, ledger: LedgerDep,
):
    student_id = to_actor_id(student)
    entries = ledger.view_verified_certificates(caller, student_id)
    return CertificateList(
        student=student_id,
        certificates=[CertificateView.from_indexed(e) for e in entries],
    )


@router.get("/institutes/{institute}/pending", response_model=PendingUploadList)
async def get_pending_uploads(institute: ActorPath, ledger: LedgerDep):
    institute_id = to_actor_id(institute)
    return PendingUploadList(
        institute=institute_id,
        pending=[
            PendingUploadView(student=p.student, index=p.index)
            for p in ledger.get_pending_uploads(institute_id)
        ],
    )
