"""Pre-insert collision checks for new profiles."""

from typing import Optional

import structlog

from core.exceptions import (
    ActivationCodeCollisionError,
    MissingIdentityIdError,
    ProfileIdCollisionError,
)
from domain.repositories.profile_repository import IProfileRepository

logger = structlog.get_logger()


async def check_collisions(
    profiles: IProfileRepository,
    profile_id: Optional[str],
    activation_code: str,
    username: Optional[str] = None,
) -> None:
    """Verify that neither the new id nor the new activation code is stored.

    Read-only and best-effort: a concurrent registration can still slip in
    between this check and the insert. The id is backstopped by the store's
    conditional insert; the activation code is not.

    Args:
        profiles: Repository to look the candidates up in.
        profile_id: Subject id returned by the identity provider.
        activation_code: Freshly generated activation code.
        username: Provider username of the new identity, logged when the id
            is missing so the orphaned identity can be reconciled.

    Raises:
        MissingIdentityIdError: If the provider returned no id.
        ActivationCodeCollisionError: If the activation code is already used.
        ProfileIdCollisionError: If a profile with this id already exists.
    """
    if not profile_id:
        logger.error(
            "identity_id_missing",
            username=username,
            activation_code=activation_code,
        )
        raise MissingIdentityIdError(username)

    if await profiles.get_by_activation_code(activation_code):
        logger.error(
            "activation_code_collision",
            id=profile_id,
            activation_code=activation_code,
        )
        raise ActivationCodeCollisionError()

    if await profiles.get_by_id(profile_id):
        logger.error("profile_id_collision", id=profile_id)
        raise ProfileIdCollisionError(profile_id)
