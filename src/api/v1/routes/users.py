"""User registration API routes."""

from fastapi import APIRouter, Depends, Request, status

from api.v1.dependencies import get_registration_service
from api.v1.schemas.common import ErrorResponse
from api.v1.schemas.user import (
    ProfileCreatedResponse,
    ProfileResponse,
    RegisterUserRequest,
)
from core.config import settings
from core.rate_limit import limiter
from domain.services.registration_service import RegistrationRequest, RegistrationService

router = APIRouter(prefix="/users", tags=["users"])


def get_source_ip(request: Request) -> str | None:
    """Client IP, preferring the first hop of X-Forwarded-For."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop
    return request.client.host if request.client else None


@router.post(
    "/register",
    response_model=ProfileCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={
        201: {"description": "Identity and profile created"},
        400: {"model": ErrorResponse, "description": "Passwords differ or user id already exists"},
        422: {"model": ErrorResponse, "description": "Malformed request body"},
        500: {"model": ErrorResponse, "description": "Identity provider or profile store failure"},
    },
)
@limiter.limit("5/minute")  # type: ignore[untyped-decorator]
async def register_user(
    request: Request,
    body: RegisterUserRequest,
    service: RegistrationService = Depends(get_registration_service),
) -> ProfileCreatedResponse:
    """Create an identity provider account and its linked profile."""
    profile = await service.register(
        RegistrationRequest(
            name=body.name,
            email=body.email,
            password=body.password,
            repeat_password=body.repeat_password,
            source_ip=get_source_ip(request),
            source_system=body.source_system or settings.default_source_system,
        )
    )
    return ProfileCreatedResponse(
        data=ProfileResponse(
            id=profile.id,
            email=profile.email,
            name=profile.name,
            handle=profile.handle,
            role=profile.role.value,
            status=profile.status.value,
            badges=profile.badges,
            bio=profile.bio,
            created_at=profile.created_at,
        )
    )
