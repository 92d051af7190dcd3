# delivery_auth/services/refresh_tokens/dto.py
from __future__ import annotations

from dataclasses import dataclass, field

from delivery_auth.services._shared.dto import DeviceInfo, Role


@dataclass(frozen=True, slots=True)
class GenerateRefreshIn:
    """
    Input DTO for generating a refresh token.

    :param user_id: Owner subject id.
    :type user_id: str
    :param role: Owner role.
    :type role: Role
    :param tenant_id: Restaurant id for staff, ``""`` otherwise.
    :type tenant_id: str
    :param device: Device the token is bound to.
    :type device: DeviceInfo
    """

    user_id: str
    role: Role
    tenant_id: str = ""
    device: DeviceInfo = field(default_factory=DeviceInfo)
