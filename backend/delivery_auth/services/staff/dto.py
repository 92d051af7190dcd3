"""DTOs for StaffService."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class StaffCreateIn:
    """
    Input DTO for staff creation inside a restaurant.

    :param restaurant_id: Owning restaurant (tenant).
    :type restaurant_id: str
    :param email: Login email, unique per restaurant.
    :type email: str
    :param password: Raw password to be hashed by the model.
    :type password: str
    :param owner: Whether this account owns the restaurant.
    :type owner: bool
    """

    restaurant_id: str
    email: str
    password: str
    name: str
    address: str
    city: str
    postal_code: str
    country_code: str
    owner: bool = False


@dataclass(frozen=True, slots=True)
class StaffOut:
    """Public-safe staff projection."""

    id: str
    restaurant_id: str
    owner: bool
    email: str
    name: str
    address: str
    city: str
    postal_code: str
    country_code: str
    created_at: datetime
    updated_at: datetime
