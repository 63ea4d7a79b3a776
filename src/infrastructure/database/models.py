"""SQLAlchemy ORM models."""

from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, Index, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class ProfileModel(Base):
    """User profile model (id linked to the identity provider's sub)."""

    __tablename__ = "profiles"
    __table_args__ = (
        # Lookup index only: activation code uniqueness is checked before insert
        Index("ix_profiles_activation_code", "activation_code"),
    )

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    handle: Mapped[str] = mapped_column(String(256), nullable=False)
    activation_code: Mapped[str] = mapped_column(String(64), nullable=False)
    source_ip: Mapped[str | None] = mapped_column(String(64))
    source_system: Mapped[str | None] = mapped_column(String(50))
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="USER")
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="UNCONFIRMED")
    badges: Mapped[list[str]] = mapped_column(JSONB, nullable=False, default=list)
    bio: Mapped[dict[str, Any]] = mapped_column(JSONB, nullable=False, default=dict)
    data: Mapped[dict[str, Any]] = mapped_column(JSONB, nullable=False, default=dict)
