"""Refresh-token repository with server-side usability predicates."""

from __future__ import annotations

from datetime import datetime
from typing import cast

from sqlalchemy import select, update

from delivery_auth.models.refresh_token import RefreshToken, RefreshTokenStatus
from delivery_auth.repositories.base import BaseRepository


class RefreshTokenRepository(BaseRepository[RefreshToken]):
    """Persistence-only repository for :class:`RefreshToken`.

    Usability (``status == active`` and ``expires_at > now``) is always part
    of the SQL ``WHERE`` clause, never checked after loading, so concurrent
    rotations cannot race between read and write.
    """

    model = RefreshToken

    def find_usable(self, token: str, now: datetime) -> RefreshToken | None:
        """Return the usable row matching ``token`` or ``None``.

        :param token: Exact opaque token value.
        :param now: Instant the usability predicate is evaluated at.
        :returns: Matching row or ``None``.
        :rtype: RefreshToken | None
        """
        stmt = select(RefreshToken).where(
            RefreshToken.token == token,
            RefreshToken.status == RefreshTokenStatus.ACTIVE.value,
            RefreshToken.expires_at > now,
        )
        return cast(RefreshToken | None, self.session.execute(stmt).scalars().first())

    def expire_usable(self, token: str, new_expires_at: datetime, now: datetime) -> int:
        """Shorten the lifetime of a usable row in a single conditional ``UPDATE``.

        Rows whose ``expires_at`` is already at or before ``new_expires_at``
        are left untouched so that an expiry never extends a lifetime.

        :param token: Exact opaque token value.
        :param new_expires_at: New absolute expiry.
        :param now: Instant used for the usability predicate and ``updated_at``.
        :returns: Number of rows updated (0 or 1).
        :rtype: int
        """
        stmt = (
            update(RefreshToken)
            .where(
                RefreshToken.token == token,
                RefreshToken.status == RefreshTokenStatus.ACTIVE.value,
                RefreshToken.expires_at > now,
                RefreshToken.expires_at > new_expires_at,
            )
            .values(expires_at=new_expires_at, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        result = self.session.execute(stmt)
        return int(result.rowcount or 0)
