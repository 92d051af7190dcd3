"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from delivery_auth.repositories.base import BaseRepository
from delivery_auth.repositories.customer import CustomerRepository
from delivery_auth.repositories.refresh_token import RefreshTokenRepository
from delivery_auth.repositories.restaurant import RestaurantRepository
from delivery_auth.repositories.staff import StaffRepository

__all__ = [
    "BaseRepository",
    "CustomerRepository",
    "RefreshTokenRepository",
    "RestaurantRepository",
    "StaffRepository",
]
