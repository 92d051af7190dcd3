"""Idempotent demo data for local development environments.

Accounts are created through the same services the HTTP layer uses, so the
printed token pairs are real and can be pasted into an API client.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy import select

from delivery_auth.api.deps import device_id_for, get_auth_service, get_restaurant_service
from delivery_auth.core.extensions import db
from delivery_auth.models import Customer, Restaurant, Staff
from delivery_auth.services._shared.dto import DeviceInfo, TokenPair
from delivery_auth.services.auth import CustomerLoginIn, CustomerRegisterIn, StaffLoginIn
from delivery_auth.services.customers import CustomerCreateIn
from delivery_auth.services.restaurants import (
    ContactIn,
    OwnerIn,
    RestaurantCreateIn,
    RestaurantRegisterIn,
)

LOGGER = logging.getLogger(__name__)

SEED_USER_AGENT = "flask-seed"
SEED_IP = "127.0.0.1"

CUSTOMER_FIXTURE: dict[str, str] = {
    "email": "alex.martinez@example.com",
    "password": "devPass123!",
    "name": "Alex Martinez",
    "address": "Calle Mayor 1",
    "city": "Madrid",
    "postal_code": "28013",
    "country_code": "ES",
}

RESTAURANT_FIXTURE: dict[str, Any] = {
    "vat_code": "ESB00000000",
    "name": "La Tasca Demo",
    "legal_name": "La Tasca Demo S.L.",
    "tax_id": "",
    "timezone_id": "Europe/Madrid",
    "contact": {
        "phone_prefix": "+34",
        "phone_number": "600000000",
        "email": "hola@latasca.example.com",
        "address": "Plaza Mayor 3",
        "city": "Madrid",
        "postal_code": "28012",
        "country_code": "ES",
    },
}

OWNER_FIXTURE: dict[str, str] = {
    "email": "jamie.lee@example.com",
    "password": "strongPass123",
    "name": "Jamie Lee",
    "address": "Plaza Mayor 3",
    "city": "Madrid",
    "postal_code": "28012",
    "country_code": "ES",
}


@dataclass(frozen=True, slots=True)
class SeededAccount:
    """One seeded identity and the token pair issued for it."""

    label: str
    user_id: str
    tenant_id: str
    tokens: TokenPair
    created: bool


def seed_device() -> DeviceInfo:
    return DeviceInfo(
        device_id=device_id_for(SEED_USER_AGENT, SEED_IP),
        user_agent=SEED_USER_AGENT,
        ip=SEED_IP,
    )


def seed_customer() -> SeededAccount:
    """Register the demo customer, or log in when it already exists."""
    auth = get_auth_service()
    existing = db.session.execute(
        select(Customer).filter_by(email=CUSTOMER_FIXTURE["email"])
    ).scalar_one_or_none()
    if existing is None:
        registered = auth.register_customer(
            CustomerRegisterIn(customer=CustomerCreateIn(**CUSTOMER_FIXTURE), device=seed_device())
        )
        LOGGER.info("seed.customer_created", extra={"user_id": registered.customer.id})
        return SeededAccount("customer", registered.customer.id, "", registered.tokens, True)

    tokens = auth.login_customer(
        CustomerLoginIn(
            email=CUSTOMER_FIXTURE["email"],
            password=CUSTOMER_FIXTURE["password"],
            device=seed_device(),
        )
    )
    return SeededAccount("customer", existing.id, "", tokens, False)


def seed_restaurant() -> SeededAccount:
    """Register the demo restaurant and its owner, or log the owner in."""
    existing = db.session.execute(
        select(Restaurant).filter_by(vat_code=RESTAURANT_FIXTURE["vat_code"])
    ).scalar_one_or_none()
    if existing is None:
        fixture = dict(RESTAURANT_FIXTURE)
        contact = ContactIn(**fixture.pop("contact"))
        registered = get_restaurant_service().register(
            RestaurantRegisterIn(
                restaurant=RestaurantCreateIn(contact=contact, **fixture),
                owner=OwnerIn(**OWNER_FIXTURE),
                device=seed_device(),
            )
        )
        LOGGER.info("seed.restaurant_created", extra={"tenant": registered.restaurant.id})
        return SeededAccount(
            "staff_owner",
            registered.staff_owner.id,
            registered.restaurant.id,
            registered.tokens,
            True,
        )

    owner = db.session.execute(
        select(Staff).filter_by(restaurant_id=existing.id, owner=True)
    ).scalar_one()
    tokens = get_auth_service().login_staff(
        StaffLoginIn(
            email=OWNER_FIXTURE["email"],
            password=OWNER_FIXTURE["password"],
            restaurant_id=existing.id,
            device=seed_device(),
        )
    )
    return SeededAccount("staff_owner", owner.id, existing.id, tokens, False)


def run_all() -> list[SeededAccount]:
    """Seed every demo identity in foreign-key order."""
    return [seed_customer(), seed_restaurant()]


__all__ = ["SeededAccount", "run_all", "seed_customer", "seed_restaurant", "seed_device"]
