"""Service layer public API.

Callers import from :mod:`delivery_auth.services` without knowing the
internal layout.

Re-exports
----------
- Base primitive: :class:`BaseService`
- Shared values: :class:`Role`, :class:`DeviceInfo`, :class:`Claims`,
  :class:`TokenPair`, :class:`RefreshRecord`
- Credential services: :class:`AccessTokenService`, :class:`RefreshTokenService`
- Orchestrator: :class:`AuthService`
- Identity services: :class:`CustomerService`, :class:`StaffService`,
  :class:`RestaurantService`
"""

from __future__ import annotations

from ._shared.base import BaseService
from ._shared.dto import Claims, DeviceInfo, RefreshRecord, Role, TokenPair
from .access_tokens import AccessTokenService
from .auth import AuthService
from .customers import CustomerService
from .refresh_tokens import RefreshTokenService
from .restaurants import RestaurantService
from .staff import StaffService

__all__ = [
    "BaseService",
    "Claims",
    "DeviceInfo",
    "RefreshRecord",
    "Role",
    "TokenPair",
    "AccessTokenService",
    "RefreshTokenService",
    "AuthService",
    "CustomerService",
    "StaffService",
    "RestaurantService",
]
