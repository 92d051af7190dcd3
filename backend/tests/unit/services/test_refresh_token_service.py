from __future__ import annotations

from datetime import timedelta

import pytest

from delivery_auth.core.clock import FixedClock
from delivery_auth.services._shared.dto import Role
from delivery_auth.services._shared.errors import (
    RefreshTokenAlreadyExistsError,
    RefreshTokenNotFoundError,
)
from delivery_auth.services._shared.ports import InMemoryRefreshTokenStore, NewRefreshToken
from delivery_auth.services.refresh_tokens import (
    DEFAULT_TOKEN_EXPIRATION,
    GenerateRefreshIn,
    RefreshTokenService,
)
from tests.helpers.utils import CLOCK_START, sample_device

CUSTOMER_ID = "a1" * 12


class CollidingStore(InMemoryRefreshTokenStore):
    """In-memory store whose first ``collisions`` inserts report a duplicate."""

    def __init__(self, collisions: int) -> None:
        super().__init__()
        self.collisions = collisions
        self.attempts = 0

    def insert(self, new):
        self.attempts += 1
        if self.attempts <= self.collisions:
            raise RefreshTokenAlreadyExistsError()
        return super().insert(new)


class TestRefreshTokenService:
    @pytest.fixture()
    def fixed_clock(self) -> FixedClock:
        return FixedClock(CLOCK_START)

    @pytest.fixture()
    def store(self) -> InMemoryRefreshTokenStore:
        return InMemoryRefreshTokenStore()

    @pytest.fixture()
    def service(self, store, fixed_clock) -> RefreshTokenService:
        return RefreshTokenService(store=store, clock=fixed_clock)

    def _generate(self, service) -> str:
        return service.generate(
            GenerateRefreshIn(user_id=CUSTOMER_ID, role=Role.CUSTOMER, device=sample_device())
        )

    def test_generate_persists_active_record_bound_to_device(self, service, store):
        token = self._generate(service)

        record = store.get(token)
        assert record is not None
        assert record.status == "active"
        assert record.user_id == CUSTOMER_ID
        assert record.role is Role.CUSTOMER
        assert record.tenant_id == ""
        assert record.device == sample_device()
        assert record.first_used_at == record.last_used_at == CLOCK_START
        assert record.expires_at == CLOCK_START + DEFAULT_TOKEN_EXPIRATION

    def test_generated_tokens_are_unique_urlsafe_values(self, service):
        tokens = {self._generate(service) for _ in range(50)}

        assert len(tokens) == 50
        for token in tokens:
            assert len(token) == 43
            assert set(token) <= set("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_")

    def test_find_active_token_returns_record_before_expiry(self, service, fixed_clock):
        token = self._generate(service)
        fixed_clock.advance(DEFAULT_TOKEN_EXPIRATION.total_seconds() - 1)

        assert service.find_active_token(token).token == token

    def test_record_exactly_at_expiry_is_unusable(self, service, fixed_clock):
        token = self._generate(service)
        fixed_clock.advance(DEFAULT_TOKEN_EXPIRATION.total_seconds())

        with pytest.raises(RefreshTokenNotFoundError):
            service.find_active_token(token)

    def test_revoked_record_is_unusable(self, service, store, fixed_clock):
        token = self._generate(service)
        store.revoke(token, fixed_clock.now())

        with pytest.raises(RefreshTokenNotFoundError):
            service.find_active_token(token)

    def test_unknown_token_is_not_found(self, service):
        with pytest.raises(RefreshTokenNotFoundError):
            service.find_active_token("does-not-exist")

    def test_expire_shortens_lifetime(self, service, store, fixed_clock):
        token = self._generate(service)
        new_expiry = fixed_clock.now() + timedelta(seconds=3)

        service.expire(token, new_expiry)

        assert store.get(token).expires_at == new_expiry
        fixed_clock.advance(3)
        with pytest.raises(RefreshTokenNotFoundError):
            service.find_active_token(token)

    def test_expire_never_extends_lifetime(self, service, store, fixed_clock):
        token = self._generate(service)
        service.expire(token, fixed_clock.now() + timedelta(seconds=3))
        fixed_clock.advance(1)

        with pytest.raises(RefreshTokenNotFoundError):
            service.expire(token, fixed_clock.now() + timedelta(seconds=3))
        assert store.get(token).expires_at == CLOCK_START + timedelta(seconds=3)

    def test_expire_unusable_record_is_not_found(self, service, fixed_clock):
        token = self._generate(service)
        fixed_clock.advance(days=8)

        with pytest.raises(RefreshTokenNotFoundError):
            service.expire(token, fixed_clock.now() + timedelta(seconds=3))

    # ------------------------------------------------------------------ #
    # Collision retry
    # ------------------------------------------------------------------ #

    def test_generate_retries_after_collision(self, fixed_clock):
        store = CollidingStore(collisions=2)
        service = RefreshTokenService(store=store, clock=fixed_clock, max_attempts=3)

        token = self._generate(service)

        assert store.attempts == 3
        assert store.get(token) is not None

    def test_generate_gives_up_after_bounded_attempts(self, fixed_clock):
        store = CollidingStore(collisions=10)
        service = RefreshTokenService(store=store, clock=fixed_clock, max_attempts=3)

        with pytest.raises(RefreshTokenAlreadyExistsError):
            self._generate(service)
        assert store.attempts == 3

    def test_duplicate_insert_raises(self, store, fixed_clock):
        new = NewRefreshToken(
            user_id=CUSTOMER_ID,
            role=Role.CUSTOMER,
            tenant_id="",
            token="same-token",
            device=sample_device(),
            now=fixed_clock.now(),
            expires_at=fixed_clock.now() + DEFAULT_TOKEN_EXPIRATION,
        )
        store.insert(new)

        with pytest.raises(RefreshTokenAlreadyExistsError):
            store.insert(new)
