"""Shared fixtures for unit tests."""

from typing import Any
from unittest.mock import AsyncMock

import pytest

from infrastructure.identity.provider import (
    SUBJECT_ATTRIBUTE,
    IdentityAttribute,
    IdentityRecord,
)


class FakeUnitOfWork:
    """Fake Unit of Work with a profile repository mock for unit testing."""

    def __init__(self) -> None:
        self.profiles = AsyncMock()
        self.profiles.get_by_id.return_value = None
        self.profiles.get_by_activation_code.return_value = None
        self.profiles.create.side_effect = lambda profile: profile
        self.entered = False
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        self.entered = True
        return self

    async def __aexit__(self, exc_type: Any, *args: Any) -> None:
        if exc_type:
            await self.rollback()


def identity_record(sub: str | None = "abc-123", email: str = "jane@x.com") -> IdentityRecord:
    """Identity as returned by the provider, optionally without a sub."""
    attributes = [IdentityAttribute(name="email", value=email)]
    if sub is not None:
        attributes.insert(0, IdentityAttribute(name=SUBJECT_ATTRIBUTE, value=sub))
    return IdentityRecord(username=email, attributes=attributes)


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def provider() -> AsyncMock:
    """Identity provider mock returning an identity with sub 'abc-123'."""
    mock = AsyncMock()
    mock.create_identity.return_value = identity_record()
    mock.set_credential.return_value = None
    mock.assign_to_groups.return_value = None
    return mock
