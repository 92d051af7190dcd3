# delivery_auth/infra/database/refresh_token_store.py
"""Relational refresh-token store built on the SQLAlchemy unit of work."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.exc import IntegrityError

from delivery_auth.models.refresh_token import RefreshToken, RefreshTokenStatus
from delivery_auth.services._shared.dto import DeviceInfo, RefreshRecord, Role
from delivery_auth.services._shared.errors import (
    RefreshTokenAlreadyExistsError,
    RefreshTokenNotFoundError,
    violates,
)
from delivery_auth.services._shared.ports.refresh_token_store import (
    NewRefreshToken,
    RefreshTokenStore,
)
from delivery_auth.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork

USER_AGENT_MAX_LENGTH = 512


def to_refresh_record(row: RefreshToken) -> RefreshRecord:
    """Project an ORM row onto the frozen :class:`RefreshRecord`."""
    return RefreshRecord(
        id=row.id,
        user_id=row.user_id,
        role=Role(row.role),
        tenant_id=row.tenant_id,
        token=row.token,
        status=row.status,
        device=DeviceInfo(device_id=row.device_id, user_agent=row.user_agent, ip=row.ip),
        first_used_at=row.first_used_at,
        last_used_at=row.last_used_at,
        expires_at=row.expires_at,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SQLAlchemyRefreshTokenStore(RefreshTokenStore):
    """
    Store refresh records in the ``refresh_tokens`` table.

    Each call runs in its own read-write unit of work. Conditional operations
    are single statements: uniqueness is enforced by ``uq_refresh_tokens_token``
    and expiry by a conditional ``UPDATE`` whose row count decides the outcome.
    """

    def insert(self, new: NewRefreshToken) -> RefreshRecord:
        """
        :raises RefreshTokenAlreadyExistsError: On a duplicate token value.
        """
        with SQLAlchemyUnitOfWork() as uow:
            row = RefreshToken(
                user_id=new.user_id,
                role=Role(new.role).value,
                tenant_id=new.tenant_id,
                token=new.token,
                status=RefreshTokenStatus.ACTIVE.value,
                device_id=new.device.device_id,
                user_agent=new.device.user_agent[:USER_AGENT_MAX_LENGTH],
                ip=new.device.ip,
                first_used_at=new.now,
                last_used_at=new.now,
                expires_at=new.expires_at,
                created_at=new.now,
                updated_at=new.now,
            )
            try:
                uow.refresh_tokens.add(row)
            except IntegrityError as exc:
                if violates(exc, "uq_refresh_tokens_token") or violates(exc, "refresh_tokens.token"):
                    raise RefreshTokenAlreadyExistsError() from exc
                raise
            return to_refresh_record(row)

    def find_usable(self, token: str, now: datetime) -> RefreshRecord:
        """
        :raises RefreshTokenNotFoundError: If missing, revoked or expired at ``now``.
        """
        with SQLAlchemyUnitOfWork() as uow:
            row = uow.refresh_tokens.find_usable(token, now)
            if row is None:
                raise RefreshTokenNotFoundError()
            return to_refresh_record(row)

    def expire_usable(self, token: str, new_expires_at: datetime, now: datetime) -> None:
        """
        :raises RefreshTokenNotFoundError: When the conditional update matched no row.
        """
        with SQLAlchemyUnitOfWork() as uow:
            if uow.refresh_tokens.expire_usable(token, new_expires_at, now) == 0:
                raise RefreshTokenNotFoundError()
