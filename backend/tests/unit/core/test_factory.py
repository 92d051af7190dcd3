from __future__ import annotations

from delivery_auth.core.clock import CLOCK_EXTENSION_KEY, FixedClock, SystemClock
from delivery_auth.core.config import TestingConfig
from delivery_auth.core.keys import SECRET_PROVIDER_EXTENSION_KEY, StaticSecretProvider
from delivery_auth.factory import create_app
from tests.helpers.utils import CLOCK_START


def test_injected_clock_and_secrets_are_kept():
    clock = FixedClock(CLOCK_START)
    secrets = StaticSecretProvider("injected-secret-0123456789abcdef")

    app = create_app(TestingConfig, clock=clock, secrets=secrets, instance_relative_config=False)

    assert app.extensions[CLOCK_EXTENSION_KEY] is clock
    assert app.extensions[SECRET_PROVIDER_EXTENSION_KEY] is secrets


def test_defaults_come_from_config():
    app = create_app(TestingConfig, instance_relative_config=False)

    assert isinstance(app.extensions[CLOCK_EXTENSION_KEY], SystemClock)
    assert app.extensions[SECRET_PROVIDER_EXTENSION_KEY].current() == TestingConfig.JWT_SECRET_KEY


def test_versioned_routes_are_registered():
    app = create_app(TestingConfig, instance_relative_config=False)

    rules = {rule.rule for rule in app.url_map.iter_rules()}

    assert {
        "/v1.0/health",
        "/v1.0/customers",
        "/v1.0/customers/login",
        "/v1.0/customers/refresh",
        "/v1.0/customers/<string:customer_id>",
        "/v1.0/restaurants",
        "/v1.0/staff/login",
        "/v1.0/staff/refresh",
    } <= rules
