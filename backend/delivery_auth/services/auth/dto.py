# delivery_auth/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta

from delivery_auth.services._shared.dto import DeviceInfo, Role, TokenPair
from delivery_auth.services.customers.dto import CustomerCreateIn, CustomerOut
from delivery_auth.services.staff.dto import StaffCreateIn, StaffOut

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class GenerateTokenPairIn:
    """
    Input DTO for issuing a fresh token pair.

    :param user_id: Subject id.
    :type user_id: str
    :param role: Subject role.
    :type role: Role
    :param tenant_id: Restaurant id for staff, ``""`` otherwise.
    :type tenant_id: str
    :param expiration_seconds: Access token lifetime.
    :type expiration_seconds: int
    :param device: Device the refresh token is bound to.
    :type device: DeviceInfo
    """

    user_id: str
    role: Role
    tenant_id: str
    expiration_seconds: int
    device: DeviceInfo = field(default_factory=DeviceInfo)


@dataclass(frozen=True, slots=True)
class RefreshTokenIn:
    """
    Input DTO for rotating a token pair.

    :param access_token: Last access token (may be expired).
    :type access_token: str
    :param refresh_token: Opaque refresh token being rotated.
    :type refresh_token: str
    :param expiration_seconds: Lifetime of the new access token.
    :type expiration_seconds: int
    :param role_override: Advisory role; the stored record always wins.
    :type role_override: Role | None
    :param device: Device presenting the refresh token.
    :type device: DeviceInfo
    """

    access_token: str
    refresh_token: str
    expiration_seconds: int
    role_override: Role | None = None
    device: DeviceInfo = field(default_factory=DeviceInfo)


@dataclass(frozen=True, slots=True)
class CustomerRegisterIn:
    """Customer registration input plus the registering device."""

    customer: CustomerCreateIn
    device: DeviceInfo = field(default_factory=DeviceInfo)


@dataclass(frozen=True, slots=True)
class StaffRegisterIn:
    """Staff registration input (tenant is ``staff.restaurant_id``)."""

    staff: StaffCreateIn
    device: DeviceInfo = field(default_factory=DeviceInfo)


@dataclass(frozen=True, slots=True)
class CustomerLoginIn:
    """
    Input DTO for customer login.

    :param email: Login email.
    :type email: str
    :param password: Raw password (to be verified).
    :type password: str
    """

    email: str
    password: str
    device: DeviceInfo = field(default_factory=DeviceInfo)


@dataclass(frozen=True, slots=True)
class StaffLoginIn:
    """
    Input DTO for staff login, scoped to one restaurant.

    :param restaurant_id: Restaurant the staff member works for.
    :type restaurant_id: str
    """

    email: str
    password: str
    restaurant_id: str
    device: DeviceInfo = field(default_factory=DeviceInfo)


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class RegisteredCustomerOut:
    """Created customer and its bootstrap token pair."""

    customer: CustomerOut
    tokens: TokenPair


@dataclass(frozen=True, slots=True)
class RegisteredStaffOut:
    """Created staff member and its bootstrap token pair."""

    staff: StaffOut
    tokens: TokenPair


# ------------------------------ Config DTO --------------------------------- #


@dataclass(frozen=True, slots=True)
class AuthConfig:
    """
    Orchestrator settings.

    :param login_expiration_seconds: Access lifetime for login and registration.
    :type login_expiration_seconds: int
    :param grace_window: How long a rotated refresh token keeps working.
    :type grace_window: timedelta
    """

    login_expiration_seconds: int = 3600
    grace_window: timedelta = timedelta(seconds=3)
