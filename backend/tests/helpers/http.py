"""HTTP helper utilities for tests."""

from __future__ import annotations

from typing import Any

from tests.helpers.utils import TEST_IP, TEST_USER_AGENT

API = "/v1.0"


def json_headers(auth_token: str | None = None) -> dict[str, str]:
    """Return standard JSON headers for the test device.

    Parameters
    ----------
    auth_token:
        Optional bearer token to include.

    Returns
    -------
    dict[str, str]
        HTTP headers dictionary.
    """

    headers = {
        "Content-Type": "application/json",
        "Accept": "application/json",
        "User-Agent": TEST_USER_AGENT,
        "X-Real-IP": TEST_IP,
    }
    if auth_token:
        headers["Authorization"] = f"Bearer {auth_token}"
    return headers


def customer_payload(**overrides: Any) -> dict[str, Any]:
    payload = {
        "email": "ana.garcia@example.com",
        "password": "Passw0rd!",
        "name": "Ana Garcia",
        "address": "Calle Mayor 1",
        "city": "Madrid",
        "postal_code": "28013",
        "country_code": "ES",
    }
    payload.update(overrides)
    return payload


def restaurant_payload(vat_code: str = "ESB12345678", owner_email: str = "owner@example.com") -> dict:
    """Body for ``POST /v1.0/restaurants``."""
    return {
        "restaurant": {
            "vat_code": vat_code,
            "name": "Casa Pepe",
            "legal_name": "Casa Pepe S.L.",
            "tax_id": "B12345678",
            "timezone_id": "Europe/Madrid",
            "contact": {
                "phone_prefix": "+34",
                "phone_number": "915550000",
                "email": "hola@casapepe.example.com",
                "address": "Calle Toledo 10",
                "city": "Madrid",
                "postal_code": "28005",
                "country_code": "ES",
            },
        },
        "staff_owner": customer_payload(email=owner_email, name="Pepe Owner"),
    }
