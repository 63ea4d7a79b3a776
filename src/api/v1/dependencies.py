"""Dependency injection factories for API v1."""

from functools import lru_cache
from typing import Callable

import httpx

from core.config import settings
from domain.services.registration_service import RegistrationService
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from infrastructure.identity.supabase_provider import SupabaseIdentityProvider


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_identity_http_client() -> httpx.AsyncClient:
    """Get the process-wide HTTP client for the identity provider."""
    return httpx.AsyncClient(timeout=settings.identity_timeout_seconds)


@lru_cache
def get_identity_provider() -> SupabaseIdentityProvider:
    """Get Identity provider instance."""
    return SupabaseIdentityProvider(
        get_identity_http_client(),
        base_url=settings.supabase_url,
        service_role_key=settings.supabase_service_role_key,
    )


@lru_cache
def get_registration_service() -> RegistrationService:
    """Get Registration service instance."""
    return RegistrationService(get_identity_provider(), get_uow_factory())
