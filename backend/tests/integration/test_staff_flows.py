"""Restaurant registration and staff authentication through the HTTP boundary."""

from __future__ import annotations

from delivery_auth.models import Restaurant, Staff
from tests.factories.identities import RestaurantFactory, StaffFactory
from tests.helpers.auth import decode_claims
from tests.helpers.http import API, json_headers, restaurant_payload


def _register_restaurant(client, **kwargs):
    return client.post(f"{API}/restaurants", json=restaurant_payload(**kwargs), headers=json_headers())


def _staff_login(client, restaurant_id, email="owner@example.com", password="Passw0rd!"):
    return client.post(
        f"{API}/staff/login",
        json={"email": email, "password": password, "restaurant_id": restaurant_id},
        headers=json_headers(),
    )


def test_register_restaurant_then_owner_logs_in(client):
    resp = _register_restaurant(client)

    assert resp.status_code == 201
    body = resp.get_json()
    restaurant, owner = body["restaurant"], body["staff_owner"]
    assert restaurant["vat_code"] == "ESB12345678"
    assert restaurant["contact"]["phone_prefix"] == "+34"
    assert owner["owner"] is True
    assert owner["email"] == "owner@example.com"
    assert "password" not in owner

    login = _staff_login(client, restaurant["id"])

    assert login.status_code == 200
    pair = login.get_json()
    assert pair["token_type"] == "Bearer"
    claims = decode_claims(pair["access_token"])
    assert claims["sub"] == owner["id"]
    assert claims["role"] == "staff"
    assert claims["tenant"] == restaurant["id"]


def test_duplicate_vat_code_conflicts(client, session):
    assert _register_restaurant(client).status_code == 201

    resp = _register_restaurant(client, owner_email="other@example.com")

    assert resp.status_code == 409
    assert resp.get_json()["code"] == "RESTAURANT_ALREADY_EXISTS"
    assert session.query(Restaurant).count() == 1
    assert session.query(Staff).count() == 1


def test_staff_login_is_scoped_to_the_restaurant(client, session):
    staff = StaffFactory(email="cook@example.com")
    other = RestaurantFactory()
    session.commit()

    assert _staff_login(client, staff.restaurant_id, email="cook@example.com").status_code == 200

    resp = _staff_login(client, other.id, email="cook@example.com")

    assert resp.status_code == 401
    assert resp.get_json()["code"] == "INVALID_CREDENTIALS"


def test_staff_login_requires_restaurant_id(client):
    resp = client.post(
        f"{API}/staff/login",
        json={"email": "cook@example.com", "password": "Passw0rd!"},
        headers=json_headers(),
    )

    assert resp.status_code == 400
    assert resp.get_json()["details"] == ["restaurant_id is required"]


def test_staff_rotation_keeps_the_tenant(client, clock):
    restaurant = _register_restaurant(client).get_json()["restaurant"]
    pair = _staff_login(client, restaurant["id"]).get_json()
    clock.advance(seconds=1)

    resp = client.post(
        f"{API}/staff/refresh",
        json={"access_token": pair["access_token"], "refresh_token": pair["refresh_token"]},
        headers=json_headers(),
    )

    assert resp.status_code == 200
    claims = decode_claims(resp.get_json()["access_token"])
    assert claims["role"] == "staff"
    assert claims["tenant"] == restaurant["id"]


def test_refresh_record_wins_over_the_endpoint_role(client, clock):
    restaurant = _register_restaurant(client).get_json()["restaurant"]
    pair = _staff_login(client, restaurant["id"]).get_json()
    clock.advance(seconds=1)

    resp = client.post(
        f"{API}/customers/refresh",
        json={"access_token": pair["access_token"], "refresh_token": pair["refresh_token"]},
        headers=json_headers(),
    )

    assert resp.status_code == 200
    assert decode_claims(resp.get_json()["access_token"])["role"] == "staff"


def test_invalid_nested_payload_lists_every_field(client):
    resp = client.post(f"{API}/restaurants", json={"staff_owner": {}}, headers=json_headers())

    assert resp.status_code == 400
    body = resp.get_json()
    assert body["code"] == "VALIDATION_ERROR"
    assert "restaurant.vat_code is required" in body["details"]
    assert "restaurant.contact.email is required" in body["details"]
    assert "staff_owner.email is required" in body["details"]
