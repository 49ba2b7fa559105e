"""Linkage Schemas: link and transfer requests, linkage status views."""

from pydantic import BaseModel

from ecertify.schemas.common import ActorAddress


class LinkRequest(BaseModel):
    institute: ActorAddress


class TransferRequestBody(BaseModel):
    new_institute: ActorAddress


class TransferStatus(BaseModel):
    target_institute: str | None
    pending: bool


class StudentLinkage(BaseModel):
    student: str
    institute: str | None
    transfer: TransferStatus


class InstituteStudents(BaseModel):
    institute: str
    students: list[str]
