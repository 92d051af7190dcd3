# delivery_auth/services/access_tokens/dto.py
from __future__ import annotations

from dataclasses import dataclass

from delivery_auth.services._shared.dto import TOKEN_TYPE_BEARER, Role


@dataclass(frozen=True, slots=True)
class GenerateTokenIn:
    """
    Input DTO for minting an access token.

    :param id: Subject identifier.
    :type id: str
    :param role: Subject role.
    :type role: Role
    :param tenant_id: Restaurant id for staff, ``""`` otherwise.
    :type tenant_id: str
    :param expiration_seconds: Lifetime in seconds (> 0).
    :type expiration_seconds: int
    """

    id: str
    role: Role
    tenant_id: str
    expiration_seconds: int


@dataclass(frozen=True, slots=True)
class TokenOut:
    """
    Output DTO carrying an encoded access token.

    :param access_token: Encoded HS256 JWT.
    :type access_token: str
    :param token_type: Always ``"Bearer"``.
    :type token_type: str
    """

    access_token: str
    token_type: str = TOKEN_TYPE_BEARER
