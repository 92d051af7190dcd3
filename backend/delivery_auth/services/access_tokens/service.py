# delivery_auth/services/access_tokens/service.py
from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from delivery_auth.core.clock import Clock
from delivery_auth.core.keys import SecretProvider, verification_keys
from delivery_auth.services._shared.base import BaseService
from delivery_auth.services._shared.dto import Claims, Role
from delivery_auth.services._shared.errors import InvalidTokenError
from delivery_auth.services.access_tokens.dto import GenerateTokenIn, TokenOut

log = logging.getLogger(__name__)

ALGORITHM = "HS256"
REQUIRED_CLAIMS = ("sub", "role", "tenant", "exp", "iat")


class AccessTokenService(BaseService):
    """
    Mint and verify HS256 access tokens.

    The service is pure computation: no storage, no request state. Expiry is
    checked against the injected clock instead of the wall clock, so PyJWT's
    own time-based checks are disabled and re-implemented here.
    """

    def __init__(self, *, secrets: SecretProvider, clock: Clock | None = None) -> None:
        """
        :param secrets: Source of the signing secret and accepted prior secrets.
        :param clock: Time source for ``iat``/``exp``.
        """
        super().__init__(clock=clock)
        self.secrets = secrets

    # ------------------------------------------------------------------ #
    # Mint
    # ------------------------------------------------------------------ #

    def generate_token(self, dto: GenerateTokenIn) -> TokenOut:
        """
        Sign a token carrying ``sub``, ``role``, ``tenant``, ``exp`` and ``iat``.

        :param dto: Identity and lifetime.
        :returns: Encoded token.
        :rtype: TokenOut
        :raises ValueError: If the claims break their invariants
            (empty subject, tenant/role disagreement, non-positive lifetime).
        """
        issued_at = self.now().replace(microsecond=0)
        claims = Claims(
            subject=dto.id,
            role=Role(dto.role),
            tenant=dto.tenant_id or "",
            expires_at=issued_at + timedelta(seconds=int(dto.expiration_seconds)),
            issued_at=issued_at,
        )
        claims.validate()

        payload = {
            "sub": claims.subject,
            "role": claims.role.value,
            "tenant": claims.tenant,
            "exp": int(claims.expires_at.timestamp()),
            "iat": int(claims.issued_at.timestamp()),
        }
        token = jwt.encode(payload, self.secrets.current(), algorithm=ALGORITHM)
        return TokenOut(access_token=token)

    # ------------------------------------------------------------------ #
    # Verify
    # ------------------------------------------------------------------ #

    def validate_access_token(self, token: str) -> Claims:
        """
        Verify signature, algorithm, claims and expiry.

        A token is valid strictly before its ``exp``.

        :raises InvalidTokenError: On any failure.
        """
        claims = self._decode(token)
        if claims.expires_at <= self.now():
            raise InvalidTokenError("token expired")
        return claims

    def get_claims(self, token: str) -> Claims:
        """
        Same as :meth:`validate_access_token` but accepts expired tokens.

        Used by the refresh flow, where the access token has usually expired.

        :raises InvalidTokenError: On any failure other than expiry.
        """
        return self._decode(token)

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    def _decode(self, token: str) -> Claims:
        if not token or not isinstance(token, str):
            raise InvalidTokenError()

        try:
            header = jwt.get_unverified_header(token)
        except jwt.PyJWTError as exc:
            raise InvalidTokenError("malformed token") from exc
        if header.get("alg") != ALGORITHM:
            raise InvalidTokenError("unsupported algorithm")

        payload = self._verify_signature(token)
        return self._to_claims(payload)

    def _verify_signature(self, token: str) -> dict[str, Any]:
        options = {
            "verify_exp": False,
            "verify_iat": False,
            "verify_nbf": False,
            "require": list(REQUIRED_CLAIMS),
        }
        for key in verification_keys(self.secrets):
            try:
                return jwt.decode(token, key, algorithms=[ALGORITHM], options=options)
            except jwt.InvalidSignatureError:
                continue
            except jwt.PyJWTError as exc:
                raise InvalidTokenError("invalid token") from exc
        raise InvalidTokenError("signature verification failed")

    def _to_claims(self, payload: dict[str, Any]) -> Claims:
        subject, role, tenant = payload.get("sub"), payload.get("role"), payload.get("tenant")
        exp, iat = payload.get("exp"), payload.get("iat")

        if not isinstance(subject, str) or not subject:
            raise InvalidTokenError("invalid subject")
        if not isinstance(tenant, str):
            raise InvalidTokenError("invalid tenant")
        if not _is_int(exp) or not _is_int(iat):
            raise InvalidTokenError("invalid timestamps")
        try:
            parsed_role = Role.parse(str(role))
        except ValueError as exc:
            raise InvalidTokenError("unsupported role") from exc

        claims = Claims(
            subject=subject,
            role=parsed_role,
            tenant=tenant,
            expires_at=datetime.fromtimestamp(exp, tz=UTC),
            issued_at=datetime.fromtimestamp(iat, tz=UTC),
        )
        try:
            claims.validate()
        except ValueError as exc:
            raise InvalidTokenError(str(exc)) from exc
        return claims


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
