"""Identity provider protocol."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Protocol

# Attribute carrying the provider's stable subject identifier
SUBJECT_ATTRIBUTE = "sub"


class IdentityNotFoundError(Exception):
    """No identity matches the given username/email."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"Identity not found for {email}")


@dataclass
class IdentityAttribute:
    """A single name/value attribute of an identity."""

    name: str
    value: Optional[str] = None


@dataclass
class IdentityRecord:
    """Provider-side representation of an identity."""

    username: str
    attributes: list[IdentityAttribute] = field(default_factory=list)
    enabled: bool = True
    status: Optional[str] = None
    created_at: Optional[datetime] = None

    def get_attribute(self, name: str) -> Optional[str]:
        """Return the value of the first attribute called ``name``."""
        attribute = next((attr for attr in self.attributes if attr.name == name), None)
        return attribute.value if attribute else None

    @property
    def subject_id(self) -> Optional[str]:
        """The stable subject identifier, if provisioning returned one."""
        return self.get_attribute(SUBJECT_ATTRIBUTE)


class IIdentityProvider(Protocol):
    """Protocol for identity providers."""

    async def create_identity(self, email: str, name: str) -> IdentityRecord:
        """
        Create an identity without a credential.

        Args:
            email: Login email, also used as the username
            name: Display name stored with the identity

        Returns:
            The provider's record of the new identity
        """
        ...

    async def set_credential(self, email: str, password: str) -> None:
        """Set a permanent password on the identity."""
        ...

    async def assign_to_groups(self, email: str, groups: list[str]) -> None:
        """Assign the identity to authorization groups."""
        ...
