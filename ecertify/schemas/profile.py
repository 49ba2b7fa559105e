"""Profile Schemas: registration and profile update bodies."""

from pydantic import BaseModel, Field

from ecertify.core.identity_registry import Profile


class ProfileCreate(BaseModel):
    name: str = Field(max_length=200)
    avatar_ref: str = Field("", max_length=512)
    is_institute: bool = False


class ProfileUpdate(BaseModel):
    name: str = Field(max_length=200)
    avatar_ref: str = Field("", max_length=512)


class ProfileResponse(BaseModel):
    actor: str
    name: str
    avatar_ref: str
    is_institute: bool
    exists: bool

    @classmethod
    def from_profile(cls, actor: str, profile: Profile) -> "ProfileResponse":
        return cls(
            actor=actor,
            name=profile.name,
            avatar_ref=profile.avatar_ref,
            is_institute=profile.is_institute,
            exists=profile.exists,
        )
