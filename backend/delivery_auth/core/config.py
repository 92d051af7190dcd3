"""Environment-driven settings for the auth service.

One class per deployment environment; :func:`get_config` picks it from
``APP_ENV``. Token lifetimes and the grace window are plain integers in
seconds so they can be tuned from the environment without code changes.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Final

from dotenv import load_dotenv

ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'

# Placeholder accepted outside production only
INSECURE_JWT_SECRET: Final[str] = "CHANGE_ME_JWT"

_TRUTHY = frozenset({"1", "true", "yes", "y", "on"})

# Loads .env in development (no-op when missing)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Read a flag; any of ``1/true/yes/y/on`` (any case) is ``True``."""
    val = os.getenv(name)
    if val is None:
        return default
    return val.strip().lower() in _TRUTHY


def env_int(name: str, default: int) -> int:
    """
    Read an integer setting, falling back to ``default`` when unset or blank.

    :raises ValueError: If the variable holds something that is not an integer.
    """
    val = (os.getenv(name) or "").strip()
    return int(val) if val else default


def env_list(name: str) -> tuple[str, ...]:
    """Split a comma-separated environment variable into trimmed items."""
    raw = os.getenv(name, "")
    return tuple(item.strip() for item in raw.split(",") if item.strip())


class BaseConfig:
    """Settings shared by every environment.

    Attributes
    ----------
    APP_ENV: str
        Selected environment; the seed commands refuse ``production``.
    APP_VERSION: str
        Reported by ``GET /v1.0/health``.
    JWT_SECRET_KEY: str
        Current HMAC-SHA-256 secret that signs access tokens.
    JWT_PRIOR_SECRET_KEYS: tuple[str, ...]
        Retired secrets still accepted for verification (``JWT_PRIOR_SECRET_KEYS``
        as a comma-separated list).
    ACCESS_TOKEN_EXPIRES_SECONDS: int
        Access token lifetime for login, registration and rotation.
    REFRESH_TOKEN_TTL_SECONDS: int
        Lifetime of a new refresh token (7 days).
    REFRESH_GRACE_SECONDS: int
        How long a just-rotated refresh token keeps working (3 seconds).
    REFRESH_TOKEN_MAX_ATTEMPTS: int
        Inserts tried when a generated refresh token collides.
    SQLALCHEMY_DATABASE_URI: str
        Read from ``DATABASE_URL``; any SQLAlchemy URL (PostgreSQL via
        ``postgresql+psycopg://`` in deployments, SQLite locally).
    USE_PROXYFIX: bool
        Trust one hop of ``X-Forwarded-*`` headers.
    LOG_LEVEL: str
        Root logging verbosity.
    CORS_ORIGINS: str
        Comma-separated list of allowed origins.
    """

    APP_ENV = "development"
    APP_VERSION = os.getenv("APP_VERSION", "dev")
    API_BASE_PREFIX = ""

    # Secrets / security
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", INSECURE_JWT_SECRET)
    JWT_PRIOR_SECRET_KEYS = env_list("JWT_PRIOR_SECRET_KEYS")

    # Token lifetimes
    ACCESS_TOKEN_EXPIRES_SECONDS = env_int("ACCESS_TOKEN_EXPIRES_SECONDS", 3600)
    REFRESH_TOKEN_TTL_SECONDS = env_int("REFRESH_TOKEN_TTL_SECONDS", 7 * 24 * 60 * 60)
    REFRESH_GRACE_SECONDS = env_int("REFRESH_GRACE_SECONDS", 3)
    REFRESH_TOKEN_MAX_ATTEMPTS = env_int("REFRESH_TOKEN_MAX_ATTEMPTS", 3)

    # DB
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Logging & CORS
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")
    USE_PROXYFIX = env_bool("USE_PROXYFIX", True)

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Local development: debug on, SQLite file database, placeholder secret."""

    DEBUG = env_bool("FLASK_DEBUG", True)
    CORS_MAX_AGE = 600  # 10 minutes


class TestingConfig(BaseConfig):
    """
    Automated test runs.

    In-memory SQLite unless ``TEST_DATABASE_URL`` is set, and a fixed signing
    secret so tests can decode the tokens they receive.
    """

    APP_ENV = "testing"
    APP_VERSION = "testing"
    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    JWT_SECRET_KEY = "testing-secret-0123456789abcdef0123456789"
    JWT_PRIOR_SECRET_KEYS = ()


class ProductionConfig(BaseConfig):
    """
    Production deployments.

    A real ``JWT_SECRET_KEY`` is mandatory; startup fails on the placeholder
    (see :func:`delivery_auth.core.keys.init_app`).
    """

    APP_ENV = "production"
    DEBUG = False
    SQLALCHEMY_ECHO = False
    REQUIRE_JWT_SECRET = True


CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the class named by ``APP_ENV``; unknown or unset means development."""
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
