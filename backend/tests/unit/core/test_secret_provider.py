from __future__ import annotations

import pytest
from flask import Flask

from delivery_auth.core import keys
from delivery_auth.core.config import INSECURE_JWT_SECRET
from delivery_auth.core.keys import (
    SECRET_PROVIDER_EXTENSION_KEY,
    StaticSecretProvider,
    get_secret_provider,
    verification_keys,
)


def test_static_provider_rejects_empty_secret():
    with pytest.raises(ValueError):
        StaticSecretProvider("")


def test_verification_keys_yield_current_then_distinct_priors():
    provider = StaticSecretProvider("current", ("old-1", "current", "", "old-2", "old-1"))

    assert list(verification_keys(provider)) == ["current", "old-1", "old-2"]


def test_init_app_builds_provider_from_config():
    app = Flask(__name__)
    app.config.update(JWT_SECRET_KEY="s" * 32, JWT_PRIOR_SECRET_KEYS=("p" * 32,))

    keys.init_app(app)

    provider = app.extensions[SECRET_PROVIDER_EXTENSION_KEY]
    assert provider.current() == "s" * 32
    assert provider.prior() == ("p" * 32,)


def test_init_app_refuses_placeholder_when_secret_is_required():
    app = Flask(__name__)
    app.config.update(JWT_SECRET_KEY=INSECURE_JWT_SECRET, REQUIRE_JWT_SECRET=True)

    with pytest.raises(RuntimeError):
        keys.init_app(app)


def test_init_app_keeps_injected_provider():
    app = Flask(__name__)
    injected = StaticSecretProvider("injected")
    app.extensions[SECRET_PROVIDER_EXTENSION_KEY] = injected
    app.config.update(JWT_SECRET_KEY="other")

    keys.init_app(app)

    assert app.extensions[SECRET_PROVIDER_EXTENSION_KEY] is injected


def test_get_secret_provider_uses_current_app(app):
    assert get_secret_provider().current() == app.config["JWT_SECRET_KEY"]
