"""Access Schemas: grant body and access query results."""

from pydantic import BaseModel, Field

from ecertify.schemas.common import ActorAddress


class GrantRequest(BaseModel):
    grantee: ActorAddress
    # upper bound checked against settings in the route
    duration: int = Field(gt=0)


class AccessCheck(BaseModel):
    owner: str
    requester: str
    has_access: bool
    expiry: int | None


class AccessibleStudents(BaseModel):
    requester: str
    students: list[str]
