"""SQLAlchemy implementation of Profile repository."""

import structlog
from sqlalchemy import Select, insert, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import ProfileAlreadyExistsError, ProfileStoreError
from domain.entities.profile import Profile, ProfileRole, ProfileStatus
from infrastructure.database.models import ProfileModel

logger = structlog.get_logger()


def log_store_error(error: Exception) -> None:
    """Log a profile store failure before it is raised as ProfileStoreError."""
    logger.error(
        "profile_store_error",
        error_type=type(error).__name__,
        error=str(error),
    )


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, profile: Profile) -> Profile:
        """Insert a profile unless one with the same id already exists.

        A Core INSERT is used so the primary key constraint, not the
        session identity map, decides whether the id is taken.
        """
        stmt = insert(ProfileModel).values(**self._to_values(profile))
        try:
            await self._session.execute(stmt)
        except IntegrityError as e:
            await self._session.rollback()
            if await self.get_by_id(profile.id) is not None:
                raise ProfileAlreadyExistsError(profile.id) from e
            log_store_error(e)
            raise ProfileStoreError() from e
        except SQLAlchemyError as e:
            log_store_error(e)
            raise ProfileStoreError() from e
        return profile

    async def get_by_id(self, id: str) -> Profile | None:
        """Get a profile by its primary key."""
        stmt = select(ProfileModel).where(ProfileModel.id == id)
        return await self._fetch_one(stmt)

    async def get_by_activation_code(self, activation_code: str) -> Profile | None:
        """Get a profile by its activation code."""
        stmt = (
            select(ProfileModel)
            .where(ProfileModel.activation_code == activation_code)
            .limit(1)
        )
        return await self._fetch_one(stmt)

    async def _fetch_one(self, stmt: Select) -> Profile | None:
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as e:
            log_store_error(e)
            raise ProfileStoreError() from e
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    def _to_entity(self, model: ProfileModel) -> Profile:
        """Convert ORM model to domain entity."""
        return Profile(
            id=model.id,
            created_at=model.created_at,
            email=model.email,
            name=model.name,
            handle=model.handle,
            activation_code=model.activation_code,
            source_ip=model.source_ip,
            source_system=model.source_system,
            role=ProfileRole(model.role),
            status=ProfileStatus(model.status),
            badges=list(model.badges or []),
            bio=dict(model.bio or {}),
            data=dict(model.data or {}),
        )

    def _to_values(self, entity: Profile) -> dict:
        """Convert domain entity to insert values."""
        return {
            "id": entity.id,
            "created_at": entity.created_at,
            "email": entity.email,
            "name": entity.name,
            "handle": entity.handle,
            "activation_code": entity.activation_code,
            "source_ip": entity.source_ip,
            "source_system": entity.source_system,
            "role": entity.role.value,
            "status": entity.status.value,
            "badges": list(entity.badges),
            "bio": dict(entity.bio),
            "data": dict(entity.data),
        }
