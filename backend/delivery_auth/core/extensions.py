"""Extension singletons: database, migrations, clock and signing secrets."""

from __future__ import annotations

from flask import Flask
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import MetaData

# Constraint names are stable across backends; the services match on them
# (``uq_customers_email``, ``uq_refresh_tokens_token``) to classify conflicts.
NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=NAMING_CONVENTION)

db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate(render_as_batch=True)


def init_app(app: Flask) -> None:
    """
    Bind the extensions to ``app``.

    Imports :mod:`delivery_auth.models` so the metadata is complete for
    ``flask db`` commands, then installs the clock and the secret provider
    unless the factory injected them already.

    :raises RuntimeError: If the environment requires a real signing secret
        and only the placeholder is configured.
    """
    db.init_app(app)

    from delivery_auth import models as _models  # noqa: F401

    migrate.init_app(app, db)

    from delivery_auth.core import clock, keys

    clock.init_app(app)
    keys.init_app(app)
