from __future__ import annotations

import threading
from datetime import timedelta

import pytest

from delivery_auth.services._shared.dto import Role
from delivery_auth.services._shared.errors import (
    RefreshTokenAlreadyExistsError,
    RefreshTokenNotFoundError,
)
from delivery_auth.services._shared.ports import (
    STATUS_REVOKED,
    InMemoryRefreshTokenStore,
    NewRefreshToken,
)
from tests.helpers.utils import CLOCK_START, sample_device


def _new(token: str) -> NewRefreshToken:
    return NewRefreshToken(
        user_id="a1" * 12,
        role=Role.CUSTOMER,
        tenant_id="",
        token=token,
        device=sample_device(),
        now=CLOCK_START,
        expires_at=CLOCK_START + timedelta(seconds=10),
    )


@pytest.fixture()
def store() -> InMemoryRefreshTokenStore:
    return InMemoryRefreshTokenStore()


def test_usability_boundary(store):
    store.insert(_new("t"))

    assert store.find_usable("t", CLOCK_START + timedelta(seconds=9)).token == "t"
    with pytest.raises(RefreshTokenNotFoundError):
        store.find_usable("t", CLOCK_START + timedelta(seconds=10))


def test_revoke_is_terminal(store):
    store.insert(_new("t"))

    store.revoke("t", CLOCK_START)

    assert store.get("t").status == STATUS_REVOKED
    with pytest.raises(RefreshTokenNotFoundError):
        store.expire_usable("t", CLOCK_START + timedelta(seconds=1), CLOCK_START)


def test_concurrent_inserts_of_same_token_admit_one(store):
    barrier = threading.Barrier(8)
    outcomes: list[str] = []
    lock = threading.Lock()

    def _insert():
        barrier.wait()
        try:
            store.insert(_new("same"))
            result = "ok"
        except RefreshTokenAlreadyExistsError:
            result = "dup"
        with lock:
            outcomes.append(result)

    threads = [threading.Thread(target=_insert) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert outcomes.count("ok") == 1
    assert outcomes.count("dup") == 7


def test_concurrent_expiries_shorten_once(store):
    store.insert(_new("t"))
    barrier = threading.Barrier(4)
    successes: list[int] = []

    def _expire():
        barrier.wait()
        try:
            store.expire_usable("t", CLOCK_START + timedelta(seconds=3), CLOCK_START)
            successes.append(1)
        except RefreshTokenNotFoundError:
            pass

    threads = [threading.Thread(target=_expire) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(successes) == 1
    assert store.get("t").expires_at == CLOCK_START + timedelta(seconds=3)
