"""Registration service: provisions an identity and its linked profile."""

from collections.abc import Callable
from dataclasses import asdict, dataclass
from typing import Optional

import structlog

from core.config import settings
from core.exceptions import PasswordMismatchError
from core.text import collapse_spaces, generate_activation_code, to_pascal_case
from domain.entities.profile import Badge, Profile, ProfileRole, ProfileStatus
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.collision_guard import check_collisions
from infrastructure.identity.provider import IdentityRecord, IIdentityProvider

logger = structlog.get_logger()


@dataclass(frozen=True)
class RegistrationRequest:
    """Input for a self-service registration."""

    name: str
    email: str
    password: str
    repeat_password: str
    source_ip: Optional[str] = None
    source_system: Optional[str] = None


class RegistrationService:
    """Coordinates identity creation and profile persistence.

    The identity provider and the profile store cannot share a transaction.
    Identity creation happens first and is not compensated: if a later step
    fails, the identity remains without a profile and the failure is raised
    to the caller.
    """

    def __init__(
        self,
        identity_provider: IIdentityProvider,
        uow_factory: Callable[[], IUnitOfWork],
        activation_code_factory: Callable[[], str] = generate_activation_code,
    ) -> None:
        self._identity = identity_provider
        self._uow_factory = uow_factory
        self._new_activation_code = activation_code_factory

    async def register(self, request: RegistrationRequest) -> Profile:
        """Register a new user.

        Args:
            request: Registration input.

        Returns:
            The persisted profile, whose id is the identity's subject id.

        Raises:
            PasswordMismatchError: If password and repeat password differ.
            MissingIdentityIdError: If the provider returned no subject id.
            ActivationCodeCollisionError: If the activation code is taken.
            ProfileIdCollisionError: If the subject id is already a profile.
            ProfileAlreadyExistsError: If the conditional insert is rejected.
            ProfileStoreError: On any other store failure.
        """
        logger.debug("registration_started", data=asdict(request))

        if request.password != request.repeat_password:
            raise PasswordMismatchError()

        name = collapse_spaces(request.name, trim=True)
        email = collapse_spaces(request.email, trim=True)

        identity = await self.register_identity(email, name, request.password)

        profile_id = identity.subject_id
        activation_code = self._new_activation_code()

        async with self._uow_factory() as uow:
            await check_collisions(
                uow.profiles, profile_id, activation_code, username=identity.username
            )

            profile = Profile(
                id=profile_id,  # type: ignore[arg-type]
                email=email,
                name=name,
                handle=f"@{to_pascal_case(name)}",
                activation_code=activation_code,
                source_ip=request.source_ip,
                source_system=request.source_system,
                role=ProfileRole.USER,
                status=ProfileStatus.UNCONFIRMED,
                badges=[Badge.NEW_MEMBER.value],
                bio={"avatar_url": settings.default_avatar_url},
                data={},
            )
            await uow.profiles.create(profile)
            await uow.commit()

        logger.info(
            "registration_completed",
            profile=profile.to_log_dict(),
            identity=asdict(identity),
        )
        return profile

    async def register_identity(
        self,
        email: str,
        name: str,
        password: str,
        group: str | None = None,
    ) -> IdentityRecord:
        """Create an identity, set its password and add it to a group.

        Provider errors are not caught here.
        """
        identity = await self._identity.create_identity(email, name)
        await self._identity.set_credential(email, password)
        await self._identity.assign_to_groups(email, [group or settings.default_user_group])
        return identity
