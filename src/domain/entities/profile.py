"""Profile domain entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any


class ProfileRole(StrEnum):
    """Authorization role of a profile."""

    USER = "USER"
    ADMIN = "ADMIN"


class ProfileStatus(StrEnum):
    """Lifecycle state of a profile."""

    UNCONFIRMED = "UNCONFIRMED"
    CONFIRMED = "CONFIRMED"
    DISABLED = "DISABLED"


class Badge(StrEnum):
    """Achievement tags a profile can hold."""

    NEW_MEMBER = "NEW_MEMBER"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Profile:
    """Domain entity for a user profile linked to an identity provider account.

    ``id`` is the provider's subject identifier, so it is never generated
    locally.
    """

    id: str
    email: str
    name: str
    handle: str
    activation_code: str
    source_ip: str | None = None
    source_system: str | None = None
    role: ProfileRole = ProfileRole.USER
    status: ProfileStatus = ProfileStatus.UNCONFIRMED
    badges: list[str] = field(default_factory=lambda: [Badge.NEW_MEMBER.value])
    bio: dict[str, Any] = field(default_factory=dict)
    data: dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=_utcnow)

    def to_log_dict(self) -> dict[str, Any]:
        """Flat representation for structured log events, without the activation code."""
        return {
            "id": self.id,
            "created_at": self.created_at.isoformat(),
            "email": self.email,
            "name": self.name,
            "handle": self.handle,
            "source_ip": self.source_ip,
            "source_system": self.source_system,
            "role": self.role.value,
            "status": self.status.value,
            "badges": list(self.badges),
            "bio": dict(self.bio),
        }
