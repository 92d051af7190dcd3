# delivery_auth/services/_shared/dto.py
"""Value types shared by the credential services and the orchestrator."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

TOKEN_TYPE_BEARER = "Bearer"


class Role(str, Enum):
    """Kind of authenticated user; staff credentials always carry a tenant."""

    CUSTOMER = "customer"
    STAFF = "staff"

    @classmethod
    def parse(cls, value: str) -> Role:
        """
        Return the role named by ``value``.

        :raises ValueError: If ``value`` is not a supported role.
        """
        return cls(value)

    @property
    def requires_tenant(self) -> bool:
        return self is Role.STAFF


@dataclass(frozen=True, slots=True)
class DeviceInfo:
    """
    Client device a refresh credential is bound to.

    :param device_id: Hex SHA-256 of ``"<user_agent>|<ip>"``.
    :type device_id: str
    :param user_agent: Raw ``User-Agent`` header.
    :type user_agent: str
    :param ip: Real client address.
    :type ip: str
    """

    device_id: str = ""
    user_agent: str = ""
    ip: str = ""


@dataclass(frozen=True, slots=True)
class Claims:
    """
    Identity carried by an access token.

    :param subject: 24-hex user id.
    :param role: Role of the subject.
    :param tenant: Restaurant id for staff, ``""`` otherwise.
    :param expires_at: Absolute expiry (UTC, whole seconds).
    :param issued_at: Issue instant (UTC, whole seconds).
    """

    subject: str
    role: Role
    tenant: str
    expires_at: datetime
    issued_at: datetime

    def validate(self) -> None:
        """
        Check the claim invariants.

        :raises ValueError: On an empty subject, tenant/role disagreement or
            a non-positive lifetime.
        """
        if not self.subject:
            raise ValueError("subject is required")
        if self.role.requires_tenant and not self.tenant:
            raise ValueError("staff claims require a tenant")
        if not self.role.requires_tenant and self.tenant:
            raise ValueError("customer claims must not carry a tenant")
        if self.expires_at <= self.issued_at:
            raise ValueError("expires_at must be after issued_at")


@dataclass(frozen=True, slots=True)
class TokenPair:
    """
    Access and refresh credentials returned together.

    :param access_token: Encoded HS256 JWT.
    :param refresh_token: Opaque URL-safe token.
    :param expires_in: Requested access lifetime in seconds.
    :param token_type: Always ``"Bearer"``.
    """

    access_token: str
    refresh_token: str
    expires_in: int
    token_type: str = TOKEN_TYPE_BEARER


@dataclass(frozen=True, slots=True)
class RefreshRecord:
    """
    Read-model of a persisted refresh credential.

    Only the refresh store mutates the underlying row; everything else sees
    this frozen projection.
    """

    id: str
    user_id: str
    role: Role
    tenant_id: str
    token: str
    status: str
    device: DeviceInfo
    first_used_at: datetime
    last_used_at: datetime
    expires_at: datetime
    created_at: datetime
    updated_at: datetime

    def is_usable(self, now: datetime) -> bool:
        """Return ``True`` when active and strictly before ``expires_at``."""
        return self.status == "active" and self.expires_at > now
