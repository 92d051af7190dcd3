"""Signing-secret providers for access tokens."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

from flask import Flask, current_app

from delivery_auth.core.config import INSECURE_JWT_SECRET

log = logging.getLogger(__name__)

SECRET_PROVIDER_EXTENSION_KEY = "delivery_auth.secret_provider"


class SecretProvider(Protocol):
    """
    Port supplying symmetric key material.

    ``current`` signs new tokens; ``prior`` lists retired secrets that are
    still accepted for verification while a rotation rolls out.
    """

    def current(self) -> str: ...

    def prior(self) -> tuple[str, ...]: ...


@dataclass(frozen=True, slots=True)
class StaticSecretProvider:
    """
    Provider backed by values read once at startup.

    :param current_secret: Secret used to sign new tokens.
    :type current_secret: str
    :param prior_secrets: Secrets still valid for verification only.
    :type prior_secrets: tuple[str, ...]
    """

    current_secret: str
    prior_secrets: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.current_secret:
            raise ValueError("A non-empty signing secret is required.")

    def current(self) -> str:
        return self.current_secret

    def prior(self) -> tuple[str, ...]:
        return self.prior_secrets


def verification_keys(provider: SecretProvider) -> Iterable[str]:
    """Yield the current secret first, then each distinct prior secret."""
    seen: set[str] = set()
    for secret in (provider.current(), *provider.prior()):
        if secret and secret not in seen:
            seen.add(secret)
            yield secret


def init_app(app: Flask) -> None:
    """
    Build the secret provider from ``JWT_SECRET_KEY``/``JWT_PRIOR_SECRET_KEYS``.

    :raises RuntimeError: When the configuration demands a real secret and
        only the development placeholder is available.
    """
    if SECRET_PROVIDER_EXTENSION_KEY in app.extensions:
        return

    current = str(app.config.get("JWT_SECRET_KEY") or "")
    if current == INSECURE_JWT_SECRET:
        if app.config.get("REQUIRE_JWT_SECRET"):
            raise RuntimeError("JWT_SECRET_KEY must be set in this environment.")
        log.warning("Using the development JWT secret; set JWT_SECRET_KEY.")

    prior = tuple(app.config.get("JWT_PRIOR_SECRET_KEYS") or ())
    app.extensions[SECRET_PROVIDER_EXTENSION_KEY] = StaticSecretProvider(current, prior)


def get_secret_provider() -> SecretProvider:
    """Return the provider bound to the current application."""
    provider = current_app.extensions.get(SECRET_PROVIDER_EXTENSION_KEY)
    if provider is None:
        raise RuntimeError("Secret provider is not initialized. Call init_app() first.")
    return provider
