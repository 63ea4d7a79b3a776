"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator, Callable
from pathlib import Path
from typing import Any, Optional
from uuid import uuid4

# Disable rate limiting and point settings at test values before any import
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["LOG_JSON"] = "false"
os.environ.setdefault("SUPABASE_URL", "https://project.supabase.test")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.entities.profile import Profile
from infrastructure.database.models import Base
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from infrastructure.identity.provider import (
    SUBJECT_ATTRIBUTE,
    IdentityAttribute,
    IdentityRecord,
)


# Compile JSONB as JSON for SQLite (used in tests)
@compiles(JSONB, "sqlite")
def _compile_jsonb_sqlite(type_: Any, compiler: Any, **kw: Any) -> str:
    return "JSON"


# Test database URL (SQLite in memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class FakeIdentityProvider:
    """In-memory identity provider recording every call in order."""

    def __init__(self, sub_factory: Optional[Callable[[], Optional[str]]] = None) -> None:
        self._sub_factory = sub_factory or (lambda: str(uuid4()))
        self.calls: list[tuple[str, Any]] = []
        self.identities: dict[str, IdentityRecord] = {}
        self.passwords: dict[str, str] = {}
        self.groups: dict[str, list[str]] = {}

    async def create_identity(self, email: str, name: str) -> IdentityRecord:
        self.calls.append(("create_identity", (email, name)))
        record = IdentityRecord(
            username=email,
            attributes=[
                IdentityAttribute(name=SUBJECT_ATTRIBUTE, value=self._sub_factory()),
                IdentityAttribute(name="email", value=email),
                IdentityAttribute(name="name", value=name),
            ],
            status="UNCONFIRMED",
        )
        self.identities[email] = record
        return record

    async def set_credential(self, email: str, password: str) -> None:
        self.calls.append(("set_credential", email))
        self.passwords[email] = password

    async def assign_to_groups(self, email: str, groups: list[str]) -> None:
        self.calls.append(("assign_to_groups", (email, list(groups))))
        self.groups[email] = list(groups)


def make_profile(**overrides: Any) -> Profile:
    """Build a Profile with sensible defaults."""
    values: dict[str, Any] = {
        "id": str(uuid4()),
        "email": "jane@example.com",
        "name": "Jane Doe",
        "handle": "@JaneDoe",
        "activation_code": uuid4().hex,
        "source_ip": "1.2.3.4",
        "source_system": "web",
        "bio": {"avatar_url": "https://example.com/a.png"},
    }
    values.update(overrides)
    return Profile(**values)


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database with all tables."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def uow_factory(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[[], SQLAlchemyUnitOfWork]:
    """Unit of Work factory bound to the test database."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    return factory


@pytest.fixture
def identity_provider() -> FakeIdentityProvider:
    """Create an in-memory identity provider."""
    return FakeIdentityProvider()


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client with the default wiring."""
    from main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def registration_client(
    identity_provider: FakeIdentityProvider,
    uow_factory: Callable[[], SQLAlchemyUnitOfWork],
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create test client whose registration service uses test doubles.

    This client:
    - Uses an in-memory SQLite database for profiles
    - Uses FakeIdentityProvider instead of Supabase
    """
    from api.v1.dependencies import get_registration_service
    from domain.services.registration_service import RegistrationService
    from main import create_app

    app = create_app()

    def override_get_registration_service() -> RegistrationService:
        return RegistrationService(identity_provider, uow_factory)

    app.dependency_overrides[get_registration_service] = override_get_registration_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()
