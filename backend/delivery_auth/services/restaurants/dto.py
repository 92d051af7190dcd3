"""DTOs for RestaurantService."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from delivery_auth.services._shared.dto import DeviceInfo, TokenPair
from delivery_auth.services.staff.dto import StaffOut


@dataclass(frozen=True, slots=True)
class ContactIn:
    """Restaurant contact block."""

    phone_prefix: str
    phone_number: str
    email: str
    address: str
    city: str
    postal_code: str
    country_code: str


@dataclass(frozen=True, slots=True)
class RestaurantCreateIn:
    """
    Input DTO for restaurant creation.

    :param vat_code: VAT registration code; unique.
    :type vat_code: str
    :param timezone_id: IANA time zone name (e.g. ``Europe/Madrid``).
    :type timezone_id: str
    """

    vat_code: str
    name: str
    legal_name: str
    timezone_id: str
    contact: ContactIn
    tax_id: str = ""


@dataclass(frozen=True, slots=True)
class OwnerIn:
    """Credentials and profile of the restaurant's first staff member."""

    email: str
    password: str
    name: str
    address: str
    city: str
    postal_code: str
    country_code: str


@dataclass(frozen=True, slots=True)
class RestaurantRegisterIn:
    """Restaurant plus its owner, registered together."""

    restaurant: RestaurantCreateIn
    owner: OwnerIn
    device: DeviceInfo = field(default_factory=DeviceInfo)


@dataclass(frozen=True, slots=True)
class RestaurantOut:
    """Public restaurant projection with the nested contact block."""

    id: str
    vat_code: str
    name: str
    legal_name: str
    tax_id: str
    timezone_id: str
    contact: ContactIn
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True, slots=True)
class RegisteredRestaurantOut:
    """
    Result of a restaurant registration.

    :param restaurant: Created restaurant.
    :param staff_owner: Created owner account.
    :param tokens: Bootstrap pair of the owner.
    """

    restaurant: RestaurantOut
    staff_owner: StaffOut
    tokens: TokenPair
