"""Request schemas and the ``"<path> <rule>"`` detail flattening."""

from __future__ import annotations

import pytest
from marshmallow import ValidationError

from delivery_auth.schemas import (
    CustomerLoginSchema,
    CustomerRegisterSchema,
    RestaurantRegisterSchema,
    StaffLoginSchema,
    has_type_errors,
    validation_details,
)


def _details(schema, payload) -> list[str]:
    with pytest.raises(ValidationError) as exc:
        schema.load(payload)
    return validation_details(exc.value.normalized_messages())


VALID_CUSTOMER = {
    "email": "ana@example.com",
    "password": "Passw0rd!",
    "name": "Ana",
    "address": "Calle Mayor 1",
    "city": "Madrid",
    "postal_code": "28013",
    "country_code": "ES",
}


def test_valid_customer_payload_loads_and_drops_unknown_keys():
    data = CustomerRegisterSchema().load({**VALID_CUSTOMER, "role": "admin"})

    assert data == VALID_CUSTOMER


def test_missing_and_empty_fields_are_required():
    details = _details(CustomerLoginSchema(), {"email": ""})

    assert set(details) == {"email is required", "password is required"}


def test_only_first_rule_per_field_is_reported():
    details = _details(CustomerLoginSchema(), {"email": "", "password": "Passw0rd!"})

    assert details == ["email is required"]


def test_rule_messages():
    details = _details(
        CustomerRegisterSchema(),
        {
            **VALID_CUSTOMER,
            "email": "not-an-email",
            "password": "short",
            "name": "x" * 101,
            "postal_code": "123",
            "country_code": "ESP",
        },
    )

    assert set(details) == {
        "email must be a valid email address",
        "password must be a valid password with at least 8 characters long",
        "name must not exceed 100 characters long",
        "postal_code must be at least 5 characters long",
        "country_code must not exceed 2 characters long",
    }


def test_null_is_reported_as_required():
    details = _details(CustomerLoginSchema(), {"email": None, "password": "Passw0rd!"})

    assert details == ["email is required"]


def test_staff_login_requires_restaurant_id():
    details = _details(StaffLoginSchema(), {"email": "a@example.com", "password": "Passw0rd!"})

    assert details == ["restaurant_id is required"]


def test_missing_nested_objects_report_every_inner_field():
    details = _details(RestaurantRegisterSchema(), {})

    assert "restaurant.vat_code is required" in details
    assert "restaurant.timezone_id is required" in details
    assert "restaurant.contact.phone_prefix is required" in details
    assert "restaurant.contact.email is required" in details
    assert "staff_owner.password is required" in details
    assert not any(d.startswith("restaurant.tax_id") for d in details)


def test_restaurant_specific_rules():
    payload = {
        "restaurant": {
            "vat_code": "ESB1",
            "name": "Casa",
            "legal_name": "Casa S.L.",
            "timezone_id": "Mars/Olympus",
            "contact": {
                "phone_prefix": "0034",
                "phone_number": "12",
                "email": "casa@example.com",
                "address": "Calle 1",
                "city": "Madrid",
                "postal_code": "28001",
                "country_code": "ES",
            },
        },
        "staff_owner": {**VALID_CUSTOMER},
    }

    details = _details(RestaurantRegisterSchema(), payload)

    assert set(details) == {
        "restaurant.timezone_id is invalid",
        "restaurant.contact.phone_prefix is invalid",
        "restaurant.contact.phone_number is invalid",
    }


@pytest.mark.parametrize(
    ("schema", "payload"),
    [
        (CustomerLoginSchema(), {"email": 42, "password": "Passw0rd!"}),
        (RestaurantRegisterSchema(), {"restaurant": "nope", "staff_owner": {}}),
    ],
)
def test_wrong_json_types_are_flagged(schema, payload):
    with pytest.raises(ValidationError) as exc:
        schema.load(payload)

    assert has_type_errors(exc.value.normalized_messages())


def test_unknown_messages_collapse_to_is_invalid():
    assert validation_details({"field": ["Something odd."]}) == ["field is invalid"]
