"""Factory Boy definition for :class:`delivery_auth.models.RefreshToken`."""

from __future__ import annotations

from datetime import timedelta

import factory

from delivery_auth.models import RefreshToken, RefreshTokenStatus
from delivery_auth.services.refresh_tokens import new_refresh_token
from tests.helpers.utils import CLOCK_START
from tests.factories import BaseFactory


class RefreshTokenFactory(BaseFactory):
    """
    Build persisted refresh records for a customer by default.

    Timestamps are anchored on the test clock start, so a default record is
    usable until seven days after it.
    """

    class Meta:
        model = RefreshToken

    user_id = factory.Sequence(lambda n: f"{n:024x}")
    role = "customer"
    tenant_id = ""
    token = factory.LazyFunction(new_refresh_token)
    status = RefreshTokenStatus.ACTIVE.value
    device_id = ""
    user_agent = "pytest"
    ip = "127.0.0.1"
    first_used_at = CLOCK_START
    last_used_at = CLOCK_START
    expires_at = factory.LazyFunction(lambda: CLOCK_START + timedelta(days=7))
