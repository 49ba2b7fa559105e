"""Certificate Schemas: upload body and certificate listings.

Invariants:
    - Listings always carry the original index; verified-only listings skip indexes
"""

from pydantic import BaseModel, Field

from ecertify.core.certificate_store import Certificate, IndexedCertificate


class CertificateUpload(BaseModel):
    content_ref: str = Field(max_length=512)
    document_name: str = Field(max_length=200)


class CertificateView(BaseModel):
    index: int
    content_ref: str
    document_name: str
    uploader: str
    verified: bool
    uploaded_at: int

    @classmethod
    def from_record(cls, index: int, cert: Certificate) -> "CertificateView":
        return cls(
            index=index,
            content_ref=cert.content_ref,
            document_name=cert.document_name,
            uploader=cert.uploader,
            verified=cert.verified,
            uploaded_at=cert.uploaded_at,
        )

    @classmethod
    def from_indexed(cls, entry: IndexedCertificate) -> "CertificateView":
        return cls.from_record(entry.index, entry.certificate)


class CertificateList(BaseModel):
    student: str
    certificates: list[CertificateView]


class PendingUploadView(BaseModel):
    student: str
    index: int


class PendingUploadList(BaseModel):
    institute: str
    pending: list[PendingUploadView]
