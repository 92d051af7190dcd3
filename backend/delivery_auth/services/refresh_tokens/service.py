# delivery_auth/services/refresh_tokens/service.py
from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta

from delivery_auth.core.clock import Clock
from delivery_auth.services._shared.base import BaseService
from delivery_auth.services._shared.dto import RefreshRecord, Role
from delivery_auth.services._shared.errors import RefreshTokenAlreadyExistsError
from delivery_auth.services._shared.ports.refresh_token_store import (
    NewRefreshToken,
    RefreshTokenStore,
)
from delivery_auth.services.refresh_tokens.dto import GenerateRefreshIn

log = logging.getLogger(__name__)

DEFAULT_TOKEN_EXPIRATION = timedelta(days=7)
DEFAULT_MAX_ATTEMPTS = 3
TOKEN_BYTES = 32


def new_refresh_token() -> str:
    """Return 32 random bytes as unpadded URL-safe base64."""
    return secrets.token_urlsafe(TOKEN_BYTES)


class RefreshTokenService(BaseService):
    """
    Lifecycle of opaque refresh tokens (generate, look up, expire).

    Storage is delegated to a :class:`RefreshTokenStore`; every "now" comes
    from the injected clock so usability is deterministic under test.
    """

    def __init__(
        self,
        *,
        store: RefreshTokenStore,
        clock: Clock | None = None,
        ttl: timedelta = DEFAULT_TOKEN_EXPIRATION,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        """
        :param store: Persistence port for refresh records.
        :param clock: Time source.
        :param ttl: Lifetime of freshly generated tokens.
        :param max_attempts: Inserts tried before a token collision propagates.
        """
        super().__init__(clock=clock)
        self.store = store
        self.ttl = ttl
        self.max_attempts = max(1, int(max_attempts))

    def generate(self, dto: GenerateRefreshIn) -> str:
        """
        Create and persist an active refresh token.

        :param dto: Identity and device to bind.
        :returns: The opaque token value.
        :rtype: str
        :raises RefreshTokenAlreadyExistsError: If every attempt collided.
        """
        role = Role(dto.role)
        for attempt in range(1, self.max_attempts + 1):
            now = self.now()
            token = new_refresh_token()
            try:
                self.store.insert(
                    NewRefreshToken(
                        user_id=dto.user_id,
                        role=role,
                        tenant_id=dto.tenant_id or "",
                        token=token,
                        device=dto.device,
                        now=now,
                        expires_at=now + self.ttl,
                    )
                )
            except RefreshTokenAlreadyExistsError:
                log.warning(
                    "Refresh token collision (attempt %s of %s)",
                    attempt,
                    self.max_attempts,
                    extra={"user_id": dto.user_id, "role": role.value},
                )
                if attempt == self.max_attempts:
                    raise
                continue
            return token
        raise RefreshTokenAlreadyExistsError()  # pragma: no cover

    def find_active_token(self, token: str) -> RefreshRecord:
        """
        Return the record if usable now.

        :raises RefreshTokenNotFoundError: If missing, revoked or expired.
        """
        return self.store.find_usable(token, self.now())

    def expire(self, token: str, new_expires_at: datetime) -> None:
        """
        Shorten a usable record's lifetime to ``new_expires_at``.

        :raises RefreshTokenNotFoundError: If no usable record would be shortened.
        """
        self.store.expire_usable(token, new_expires_at, self.now())
