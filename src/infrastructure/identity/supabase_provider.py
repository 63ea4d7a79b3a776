"""Supabase (GoTrue admin API) identity provider implementation.

All calls use the service role key and hit the admin endpoints:

    POST /auth/v1/admin/users           create an identity
    GET  /auth/v1/admin/users?filter=   look an identity up by email
    PUT  /auth/v1/admin/users/{id}      set password / app_metadata

Supabase user payload (abridged):
    {
        "id": "user-uuid",
        "email": "user@example.com",
        "created_at": "2026-01-01T10:00:00.000000Z",
        "email_confirmed_at": null,
        "user_metadata": { "name": "Jane Doe" },
        "app_metadata": { "groups": ["USER"] }
    }
"""

from datetime import datetime
from typing import Any, Optional

import httpx
import structlog

from core.config import settings
from infrastructure.identity.provider import (
    SUBJECT_ATTRIBUTE,
    IdentityAttribute,
    IdentityNotFoundError,
    IdentityRecord,
)

logger = structlog.get_logger()

ADMIN_USERS_PATH = "/auth/v1/admin/users"


class SupabaseIdentityProvider:
    """Identity provider backed by the Supabase auth admin API.

    The ``httpx.AsyncClient`` is owned by the caller so a single pooled
    client can be shared for the lifetime of the process.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str = settings.supabase_url,
        service_role_key: str = settings.supabase_service_role_key,
    ) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._service_role_key = service_role_key

    async def create_identity(self, email: str, name: str) -> IdentityRecord:
        """Create an unconfirmed identity with no password."""
        response = await self._client.post(
            self._url(ADMIN_USERS_PATH),
            headers=self._headers(),
            json={
                "email": email,
                "email_confirm": False,
                "user_metadata": {"name": name},
            },
        )
        response.raise_for_status()
        record = self._to_record(response.json())
        logger.debug("identity_created", username=record.username, sub=record.subject_id)
        return record

    async def set_credential(self, email: str, password: str) -> None:
        """Set a permanent password on the identity."""
        user_id = await self._resolve_user_id(email)
        response = await self._client.put(
            self._url(f"{ADMIN_USERS_PATH}/{user_id}"),
            headers=self._headers(),
            json={"password": password},
        )
        response.raise_for_status()

    async def assign_to_groups(self, email: str, groups: list[str]) -> None:
        """Store the identity's groups in its ``app_metadata``."""
        user_id = await self._resolve_user_id(email)
        response = await self._client.put(
            self._url(f"{ADMIN_USERS_PATH}/{user_id}"),
            headers=self._headers(),
            json={"app_metadata": {"groups": list(groups)}},
        )
        response.raise_for_status()

    async def _resolve_user_id(self, email: str) -> str:
        """Find the id of the identity whose email matches exactly."""
        response = await self._client.get(
            self._url(ADMIN_USERS_PATH),
            headers=self._headers(),
            params={"filter": email, "page": 1, "per_page": 50},
        )
        response.raise_for_status()
        users = response.json().get("users", [])
        match = next(
            (user for user in users if (user.get("email") or "").lower() == email.lower()),
            None,
        )
        if not match or not match.get("id"):
            raise IdentityNotFoundError(email)
        return str(match["id"])

    def _url(self, path: str) -> str:
        return f"{self._base_url}{path}"

    def _headers(self) -> dict[str, str]:
        return {
            "apikey": self._service_role_key,
            "Authorization": f"Bearer {self._service_role_key}",
        }

    @staticmethod
    def _to_record(payload: dict[str, Any]) -> IdentityRecord:
        """Convert a Supabase user payload to an IdentityRecord."""
        user_metadata = payload.get("user_metadata") or {}
        created_at: Optional[datetime] = None
        if payload.get("created_at"):
            created_at = datetime.fromisoformat(payload["created_at"])

        return IdentityRecord(
            username=payload.get("email") or "",
            attributes=[
                IdentityAttribute(name=SUBJECT_ATTRIBUTE, value=payload.get("id")),
                IdentityAttribute(name="email", value=payload.get("email")),
                IdentityAttribute(name="name", value=user_metadata.get("name")),
            ],
            enabled=not payload.get("banned_until"),
            status="CONFIRMED" if payload.get("email_confirmed_at") else "UNCONFIRMED",
            created_at=created_at,
        )
