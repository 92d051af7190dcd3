"""Application factory for the authentication service."""

from __future__ import annotations

from flask import Flask

from delivery_auth.core.clock import CLOCK_EXTENSION_KEY, Clock
from delivery_auth.core.config import BaseConfig, get_config
from delivery_auth.core.keys import SECRET_PROVIDER_EXTENSION_KEY, SecretProvider
from delivery_auth.core.logger import configure_logging


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    clock: Clock | None = None,
    secrets: SecretProvider | None = None,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """
    Build the Flask application.

    :param config: Config object or import path; defaults to the class
        selected by ``APP_ENV``.
    :param clock: Time source for every token timestamp; the system clock
        when omitted.
    :param secrets: Signing secret provider; built from ``JWT_SECRET_KEY``
        and ``JWT_PRIOR_SECRET_KEYS`` when omitted.
    :raises RuntimeError: In production when no real signing secret is set.
    """
    app = Flask(__name__, instance_relative_config=instance_relative_config)

    app.config.from_object(get_config() if config is None else config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    # Injected collaborators win over the defaults installed by extensions.init_app
    if clock is not None:
        app.extensions[CLOCK_EXTENSION_KEY] = clock
    if secrets is not None:
        app.extensions[SECRET_PROVIDER_EXTENSION_KEY] = secrets

    from delivery_auth.core import cors, errors, extensions, logger, proxy

    proxy.init_app(app)
    extensions.init_app(app)
    logger.init_app(app)
    cors.init_app(app)

    from delivery_auth.api import init_app as init_api

    init_api(app)
    errors.init_app(app)

    from delivery_auth import cli

    cli.init_app(app)

    return app
