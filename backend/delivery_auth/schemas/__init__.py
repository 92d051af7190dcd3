"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import CustomerLoginSchema, RefreshSchema, StaffLoginSchema, TokenPairSchema
from .common import BaseSchema, has_type_errors, validation_details
from .customer import (
    CustomerCreatedSchema,
    CustomerRegisterSchema,
    CustomerSchema,
    CustomerUpdateSchema,
)
from .restaurant import RestaurantRegisteredSchema, RestaurantRegisterSchema
from .staff import StaffSchema

__all__ = [
    "BaseSchema",
    "validation_details",
    "has_type_errors",
    "CustomerLoginSchema",
    "StaffLoginSchema",
    "RefreshSchema",
    "TokenPairSchema",
    "CustomerRegisterSchema",
    "CustomerUpdateSchema",
    "CustomerSchema",
    "CustomerCreatedSchema",
    "RestaurantRegisterSchema",
    "RestaurantRegisteredSchema",
    "StaffSchema",
]
