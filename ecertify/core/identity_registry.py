"""Identity Registry: actor identifier -> profile (name, avatar, role).

Invariants:
    - At most one profile per actor, created once, never deleted
    - Role is fixed at creation; update accepts name and avatar only
    - Lookups of unknown actors return ABSENT_PROFILE (exists=False), never raise
"""

from dataclasses import dataclass, replace

from ecertify.core.domain_types import ActorId, ContentRef, Role
from ecertify.core.enforce_input import require_text
from ecertify.core.errors import AlreadyRegisteredError, NotRegisteredError


@dataclass(frozen=True)
class Profile:
    name: str = ""
    avatar_ref: ContentRef = ContentRef("")
    role: Role = Role.STUDENT
    exists: bool = False

    @property
    def is_institute(self) -> bool:
        return self.exists and self.role is Role.INSTITUTE

    @property
    def is_student(self) -> bool:
        return self.exists and self.role is Role.STUDENT


ABSENT_PROFILE = Profile()


class IdentityRegistry:
    """Profile storage keyed by actor identifier."""

    def __init__(self) -> None:
        self._profiles: dict[ActorId, Profile] = {}

    def get(self, actor: ActorId) -> Profile:
        return self._profiles.get(actor, ABSENT_PROFILE)

    def is_registered(self, actor: ActorId) -> bool:
        return actor in self._profiles

    def is_institute(self, actor: ActorId) -> bool:
        return self.get(actor).is_institute

    def is_student(self, actor: ActorId) -> bool:
        return self.get(actor).is_student

    def create(
        self, actor: ActorId, name: str, avatar_ref: str, is_institute: bool,
    ) -> Profile:
        if actor in self._profiles:
            raise AlreadyRegisteredError(actor)
        require_text(name, "name")
        profile = Profile(
            name=name,
            avatar_ref=ContentRef(avatar_ref or ""),
            role=Role.from_flag(bool(is_institute)),
            exists=True,
        )
        self._profiles[actor] = profile
        return profile

    def update(self, actor: ActorId, name: str, avatar_ref: str) -> Profile:
        current = self._profiles.get(actor)
        if current is None:
            raise NotRegisteredError(actor)
        require_text(name, "name")
        updated = replace(current, name=name, avatar_ref=ContentRef(avatar_ref or ""))
        self._profiles[actor] = updated
        return updated

    def __len__(self) -> int:
        return len(self._profiles)
