"""
DTOs for CustomerService.

They isolate the service layer from the ORM so that the orchestrator and the
HTTP boundary never hold a live ``Customer`` row.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class CustomerCreateIn:
    """
    Input DTO for customer creation.

    :param email: Login email (normalized to lowercase by the model).
    :type email: str
    :param password: Raw password to be hashed by the model.
    :type password: str
    :param name: Display name.
    :param address: Delivery street address.
    :param city: Delivery city.
    :param postal_code: Delivery postal code.
    :param country_code: ISO 3166-1 alpha-2 country code.
    """

    email: str
    password: str
    name: str
    address: str
    city: str
    postal_code: str
    country_code: str


@dataclass(frozen=True, slots=True)
class CustomerUpdateIn:
    """
    Input DTO for profile updates; ``None`` leaves a field untouched.
    """

    name: str | None = None
    address: str | None = None
    city: str | None = None
    postal_code: str | None = None
    country_code: str | None = None


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class CustomerOut:
    """
    Public-safe customer projection (no password hash).

    :param id: 24-hex identifier.
    :type id: str
    """

    id: str
    email: str
    name: str
    address: str
    city: str
    postal_code: str
    country_code: str
    created_at: datetime
    updated_at: datetime
