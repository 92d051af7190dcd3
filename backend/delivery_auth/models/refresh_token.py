"""Persisted refresh-token records."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from sqlalchemy import Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from delivery_auth.core.extensions import db

from .base import HexIdMixin, ReprMixin, TimestampMixin, UTCDateTime


class RefreshTokenStatus(str, Enum):
    """Lifecycle status of a refresh record."""

    ACTIVE = "active"
    REVOKED = "revoked"


class RefreshToken(HexIdMixin, ReprMixin, TimestampMixin, db.Model):
    """
    One row per issued refresh token.

    A row is *usable* iff ``status == 'active'`` and ``expires_at > now``.
    Rows are never deleted by the service; rotation only shortens
    ``expires_at``.
    """

    __tablename__ = "refresh_tokens"

    user_id: Mapped[str] = mapped_column(String(24), nullable=False)
    role: Mapped[str] = mapped_column(String(16), nullable=False)
    tenant_id: Mapped[str] = mapped_column(String(24), nullable=False, default="")
    token: Mapped[str] = mapped_column(String(128), nullable=False)
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=RefreshTokenStatus.ACTIVE.value
    )

    # Device binding
    device_id: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    user_agent: Mapped[str] = mapped_column(String(512), nullable=False, default="")
    ip: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    first_used_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    last_used_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)

    expires_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)

    __table_args__ = (
        UniqueConstraint("token", name="uq_refresh_tokens_token"),
        Index("ix_refresh_tokens_user_id_status", "user_id", "status"),
    )
