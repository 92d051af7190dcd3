"""Tiny helpers shared across test modules."""

from __future__ import annotations

from contextlib import contextmanager
from datetime import UTC, datetime

from delivery_auth.api.deps import device_id_for
from delivery_auth.services._shared.dto import DeviceInfo

# Instant every test clock starts at
CLOCK_START = datetime(2025, 1, 15, 12, 0, 0, tzinfo=UTC)

TEST_USER_AGENT = "pytest-agent/1.0"
TEST_IP = "203.0.113.7"


def sample_device() -> DeviceInfo:
    """Device descriptor matching :data:`TEST_USER_AGENT` and :data:`TEST_IP`."""
    return DeviceInfo(
        device_id=device_id_for(TEST_USER_AGENT, TEST_IP),
        user_agent=TEST_USER_AGENT,
        ip=TEST_IP,
    )


@contextmanager
def not_raises(exception: type[BaseException]):
    """Context manager asserting that an exception is *not* raised.

    Parameters
    ----------
    exception: type[BaseException]
        Exception type that should not be raised within the context.
    """
    try:
        yield
    except exception as exc:  # pragma: no cover
        raise AssertionError(f"Did raise {exception}: {exc}") from exc
