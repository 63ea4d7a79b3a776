"""Profile repository protocol."""

from typing import Protocol

from domain.entities.profile import Profile


class IProfileRepository(Protocol):
    """Repository interface for Profile entities."""

    async def create(self, profile: Profile) -> Profile:
        """Insert a profile, conditioned on its id not existing yet.

        Raises:
            ProfileAlreadyExistsError: If a profile with the same id exists.
            ProfileStoreError: On any other store failure.
        """
        ...

    async def get_by_id(self, id: str) -> Profile | None:
        """Get a profile by its primary key."""
        ...

    async def get_by_activation_code(self, activation_code: str) -> Profile | None:
        """Get a profile by its activation code."""
        ...
