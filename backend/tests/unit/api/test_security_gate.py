"""Bearer parsing, role gate and subject/tenant matching."""

from __future__ import annotations

import hashlib

import pytest
from flask import g

from delivery_auth.api.deps import device_id_for, get_access_token_service, request_device
from delivery_auth.api.security import (
    bearer_token,
    require_role,
    require_subject_match,
    require_tenant_match,
)
from delivery_auth.services._shared.dto import Role
from delivery_auth.services._shared.errors import (
    AuthHeaderMissingError,
    ForbiddenError,
    InvalidAuthHeaderError,
    InvalidTokenError,
    SubjectMismatchError,
)
from delivery_auth.services.access_tokens import GenerateTokenIn

CUSTOMER_ID = "a1" * 12
STAFF_ID = "b2" * 12
RESTAURANT_ID = "c3" * 12


@pytest.fixture()
def gate(app):
    """Push a request context with a clean identity on ``g``."""

    contexts = []

    def _push(headers: dict[str, str] | None = None, **environ):
        ctx = app.test_request_context("/", headers=headers or {}, **environ)
        ctx.push()
        contexts.append(ctx)
        for attr in ("auth_subject", "auth_role", "auth_tenant"):
            g.pop(attr, None)
        return ctx

    yield _push
    while contexts:
        contexts.pop().pop()


def _mint(role: Role, subject: str, tenant: str = "", seconds: int = 60) -> str:
    return (
        get_access_token_service()
        .generate_token(
            GenerateTokenIn(id=subject, role=role, tenant_id=tenant, expiration_seconds=seconds)
        )
        .access_token
    )


@require_role(Role.CUSTOMER)
def _customer_only():
    return g.auth_subject


@require_role(Role.STAFF)
def _staff_only():
    return g.auth_tenant


class TestBearerToken:
    def test_returns_token_after_scheme(self, gate):
        gate({"Authorization": "Bearer abc.def.ghi"})

        assert bearer_token() == "abc.def.ghi"

    def test_missing_header(self, gate):
        gate()

        with pytest.raises(AuthHeaderMissingError):
            bearer_token()

    @pytest.mark.parametrize("header", ["Basic dXNlcjpwYXNz", "bearer abc", "Token abc", "Bearer    "])
    def test_wrong_scheme_or_empty_token(self, gate, header):
        gate({"Authorization": header})

        with pytest.raises(InvalidAuthHeaderError):
            bearer_token()

    def test_header_errors_are_invalid_token_errors(self):
        assert issubclass(AuthHeaderMissingError, InvalidTokenError)
        assert issubclass(InvalidAuthHeaderError, InvalidTokenError)


class TestRequireRole:
    def test_matching_role_attaches_identity(self, gate):
        gate({"Authorization": f"Bearer {_mint(Role.CUSTOMER, CUSTOMER_ID)}"})

        assert _customer_only() == CUSTOMER_ID
        assert g.auth_role == "customer"
        assert g.auth_tenant == ""

    def test_staff_identity_carries_tenant(self, gate):
        gate({"Authorization": f"Bearer {_mint(Role.STAFF, STAFF_ID, RESTAURANT_ID)}"})

        assert _staff_only() == RESTAURANT_ID

    def test_other_role_is_forbidden(self, gate):
        gate({"Authorization": f"Bearer {_mint(Role.STAFF, STAFF_ID, RESTAURANT_ID)}"})

        with pytest.raises(ForbiddenError):
            _customer_only()
        assert "auth_subject" not in g

    def test_expired_token_is_unauthorized(self, gate, clock):
        token = _mint(Role.CUSTOMER, CUSTOMER_ID, seconds=60)
        clock.advance(seconds=60)
        gate({"Authorization": f"Bearer {token}"})

        with pytest.raises(InvalidTokenError):
            _customer_only()

    def test_garbage_token_is_unauthorized(self, gate):
        gate({"Authorization": "Bearer not-a-jwt"})

        with pytest.raises(InvalidTokenError):
            _customer_only()

    def test_missing_header_is_unauthorized(self, gate):
        gate()

        with pytest.raises(AuthHeaderMissingError):
            _customer_only()


class TestSubjectAndTenantMatch:
    def test_subject_match_passes_for_owner(self, gate):
        gate({"Authorization": f"Bearer {_mint(Role.CUSTOMER, CUSTOMER_ID)}"})
        _customer_only()

        require_subject_match(CUSTOMER_ID)

    def test_subject_mismatch_is_forbidden(self, gate):
        gate({"Authorization": f"Bearer {_mint(Role.CUSTOMER, CUSTOMER_ID)}"})
        _customer_only()

        with pytest.raises(SubjectMismatchError):
            require_subject_match("f" * 24)
        assert issubclass(SubjectMismatchError, ForbiddenError)

    def test_subject_match_requires_identity(self, gate):
        gate()

        with pytest.raises(InvalidTokenError):
            require_subject_match(CUSTOMER_ID)

    def test_tenant_match(self, gate):
        gate({"Authorization": f"Bearer {_mint(Role.STAFF, STAFF_ID, RESTAURANT_ID)}"})
        _staff_only()

        require_tenant_match(RESTAURANT_ID)
        with pytest.raises(ForbiddenError):
            require_tenant_match("d4" * 12)

    def test_customer_never_matches_a_tenant(self, gate):
        gate({"Authorization": f"Bearer {_mint(Role.CUSTOMER, CUSTOMER_ID)}"})
        _customer_only()

        with pytest.raises(ForbiddenError):
            require_tenant_match("")

    def test_tenant_match_requires_identity(self, gate):
        gate()

        with pytest.raises(InvalidTokenError):
            require_tenant_match(RESTAURANT_ID)


class TestDevice:
    def test_device_id_is_sha256_of_agent_and_ip(self):
        expected = hashlib.sha256(b"agent/1.0|198.51.100.4").hexdigest()

        assert device_id_for("agent/1.0", "198.51.100.4") == expected
        assert len(expected) == 64

    def test_real_ip_header_wins(self, gate):
        gate(
            {"User-Agent": "agent/1.0", "X-Real-IP": "198.51.100.4"},
            environ_base={"REMOTE_ADDR": "10.0.0.1"},
        )

        device = request_device()

        assert device.ip == "198.51.100.4"
        assert device.user_agent == "agent/1.0"
        assert device.device_id == device_id_for("agent/1.0", "198.51.100.4")

    def test_falls_back_to_remote_addr(self, gate):
        gate({"User-Agent": "agent/1.0"}, environ_base={"REMOTE_ADDR": "10.0.0.1"})

        assert request_device().ip == "10.0.0.1"

    def test_different_agent_is_a_different_device(self):
        assert device_id_for("a", "1.1.1.1") != device_id_for("b", "1.1.1.1")
