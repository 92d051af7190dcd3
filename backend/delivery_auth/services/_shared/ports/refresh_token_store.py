from __future__ import annotations

import secrets
import threading
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Protocol

from delivery_auth.services._shared.dto import DeviceInfo, RefreshRecord, Role
from delivery_auth.services._shared.errors import (
    RefreshTokenAlreadyExistsError,
    RefreshTokenNotFoundError,
)

STATUS_ACTIVE = "active"
STATUS_REVOKED = "revoked"


@dataclass(frozen=True, slots=True)
class NewRefreshToken:
    """
    Values for a refresh record about to be inserted.

    :ivar user_id: Owner subject id.
    :ivar role: Owner role.
    :ivar tenant_id: Restaurant id for staff, ``""`` otherwise.
    :ivar token: Opaque token value; must be unique.
    :ivar device: Device the token is bound to.
    :ivar now: Creation instant (also the first/last use of the device).
    :ivar expires_at: Absolute expiration (UTC).
    """

    user_id: str
    role: Role
    tenant_id: str
    token: str
    device: DeviceInfo
    now: datetime
    expires_at: datetime


class RefreshTokenStore(Protocol):
    """
    Durable storage for refresh credentials.

    Every conditional operation MUST be evaluated atomically by the backend;
    the usability predicate is ``status == active and expires_at > now``.
    """

    def insert(self, new: NewRefreshToken) -> RefreshRecord:
        """
        Persist a new active record.

        :raises RefreshTokenAlreadyExistsError: If ``new.token`` is taken.
        """

    def find_usable(self, token: str, now: datetime) -> RefreshRecord:
        """
        Return the record for ``token`` if usable at ``now``.

        :raises RefreshTokenNotFoundError: If missing, revoked or expired.
        """

    def expire_usable(self, token: str, new_expires_at: datetime, now: datetime) -> None:
        """
        Shorten a usable record's lifetime to ``new_expires_at``.

        Never extends a lifetime: a record already expiring at or before
        ``new_expires_at`` is treated as not found.

        :raises RefreshTokenNotFoundError: If no usable record matches.
        """


class InMemoryRefreshTokenStore(RefreshTokenStore):
    """
    Dictionary-backed store with the same conditional semantics.

    .. note::
       A single lock makes each operation atomic, standing in for the
       unique index and the conditional ``UPDATE`` of the SQL adapter.
    """

    def __init__(self) -> None:
        self._by_token: dict[str, RefreshRecord] = {}
        self._lock = threading.Lock()

    def insert(self, new: NewRefreshToken) -> RefreshRecord:
        with self._lock:
            if new.token in self._by_token:
                raise RefreshTokenAlreadyExistsError()
            record = RefreshRecord(
                id=secrets.token_hex(12),
                user_id=new.user_id,
                role=new.role,
                tenant_id=new.tenant_id,
                token=new.token,
                status=STATUS_ACTIVE,
                device=new.device,
                first_used_at=new.now,
                last_used_at=new.now,
                expires_at=new.expires_at,
                created_at=new.now,
                updated_at=new.now,
            )
            self._by_token[new.token] = record
            return record

    def find_usable(self, token: str, now: datetime) -> RefreshRecord:
        with self._lock:
            record = self._by_token.get(token)
            if record is None or not record.is_usable(now):
                raise RefreshTokenNotFoundError()
            return record

    def expire_usable(self, token: str, new_expires_at: datetime, now: datetime) -> None:
        with self._lock:
            record = self._by_token.get(token)
            if record is None or not record.is_usable(now) or record.expires_at <= new_expires_at:
                raise RefreshTokenNotFoundError()
            self._by_token[token] = replace(record, expires_at=new_expires_at, updated_at=now)

    def revoke(self, token: str, now: datetime) -> None:
        """Mark a record revoked (terminal); used by tests to simulate revocation."""
        with self._lock:
            record = self._by_token.get(token)
            if record is None:
                raise RefreshTokenNotFoundError()
            self._by_token[token] = replace(record, status=STATUS_REVOKED, updated_at=now)

    def get(self, token: str) -> RefreshRecord | None:
        """Return the raw record regardless of usability."""
        return self._by_token.get(token)
