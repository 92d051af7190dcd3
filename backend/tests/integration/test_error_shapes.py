"""Uniform ``{code, message, details}`` bodies for boundary errors."""

from __future__ import annotations

import pytest

from tests.helpers.http import API, customer_payload, json_headers


def test_validation_error_lists_field_rules(client):
    resp = client.post(
        f"{API}/customers",
        json=customer_payload(email="nope", password="short", country_code=""),
        headers=json_headers(),
    )

    assert resp.status_code == 400
    body = resp.get_json()
    assert body["code"] == "VALIDATION_ERROR"
    assert body["message"] == "validation failed"
    assert set(body["details"]) == {
        "email must be a valid email address",
        "password must be a valid password with at least 8 characters long",
        "country_code is required",
    }


@pytest.mark.parametrize("body", [[], "text", 42, None])
def test_non_object_body_is_invalid_request(client, body):
    resp = client.post(f"{API}/customers/login", json=body, headers=json_headers())

    assert resp.status_code == 400
    assert resp.get_json() == {"code": "INVALID_REQUEST", "message": "invalid request", "details": []}


def test_malformed_json_is_invalid_request(client):
    resp = client.post(f"{API}/customers/login", data="{not json", headers=json_headers())

    assert resp.status_code == 400
    assert resp.get_json()["code"] == "INVALID_REQUEST"


def test_wrong_field_type_is_invalid_request(client):
    resp = client.post(
        f"{API}/customers/login",
        json={"email": ["a@example.com"], "password": "Passw0rd!"},
        headers=json_headers(),
    )

    assert resp.status_code == 400
    assert resp.get_json()["code"] == "INVALID_REQUEST"


def test_unknown_route_is_not_found(client):
    resp = client.get(f"{API}/nowhere", headers=json_headers())

    assert resp.status_code == 404
    assert resp.get_json() == {"code": "NOT_FOUND", "message": "resource not found", "details": []}


def test_wrong_method_is_reported(client):
    resp = client.get(f"{API}/staff/login", headers=json_headers())

    assert resp.status_code == 405
    body = resp.get_json()
    assert body["code"] == "METHOD_NOT_ALLOWED"
    assert body["details"] == []


def test_malformed_authorization_header_is_unauthorized(client):
    resp = client.get(
        f"{API}/customers/{'a' * 24}",
        headers={**json_headers(), "Authorization": "Token abc"},
    )

    assert resp.status_code == 401
    assert resp.get_json()["code"] == "UNAUTHORIZED"


def test_errors_echo_the_request_id(client):
    resp = client.get(f"{API}/nowhere", headers={"X-Request-ID": "req-123"})

    assert resp.headers["X-Request-ID"] == "req-123"
