"""Shared fixtures: one app per run, one rolled-back transaction per test.

The application runs against in-memory SQLite. Every test gets a session
bound to a connection-level transaction with a SAVEPOINT, and ``db.session``
is swapped for it so services, repositories and the HTTP layer all write
into the same throw-away transaction. A :class:`FixedClock` replaces the
system clock so token expiry and the refresh grace window are stepped
explicitly with ``clock.advance(...)``.
"""

from __future__ import annotations

import os

import pytest
from sqlalchemy import event
from sqlalchemy.orm import scoped_session, sessionmaker

from delivery_auth.core.clock import CLOCK_EXTENSION_KEY, FixedClock
from delivery_auth.core.config import TestingConfig
from delivery_auth.core.extensions import db as _db
from delivery_auth.factory import create_app
from tests.helpers.utils import CLOCK_START


@pytest.fixture(scope="session")
def app():
    """Application built from :class:`TestingConfig` (fixed signing secret)."""
    # DATABASE_URL from a developer shell must not reach the tests
    os.environ.pop("DATABASE_URL", None)
    app = create_app(TestingConfig, instance_relative_config=False)
    app.logger.setLevel("WARNING")
    return app


@pytest.fixture(autouse=True)
def clock(app):
    """Fresh :class:`FixedClock` at :data:`CLOCK_START`, restored after the test."""
    original = app.extensions.get(CLOCK_EXTENSION_KEY)
    fixed = FixedClock(CLOCK_START)
    app.extensions[CLOCK_EXTENSION_KEY] = fixed
    try:
        yield fixed
    finally:
        app.extensions[CLOCK_EXTENSION_KEY] = original


@pytest.fixture(scope="session")
def db(app):
    """Create the schema once; the app context stays pushed for the run."""
    with app.app_context():
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope="session")
def connection(db):
    conn = db.engine.connect()
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="function")
def session(db, connection):
    """
    Session whose commits land in a SAVEPOINT of an outer transaction.

    Services commit through their Unit of Work; each commit ends the current
    SAVEPOINT and the listener opens the next one, so the outer rollback at
    teardown still discards everything the test wrote.
    """
    outer = connection.begin()
    scoped = scoped_session(sessionmaker(bind=connection, future=True))
    nested = connection.begin_nested()

    @event.listens_for(scoped(), "after_transaction_end")
    def _restart_savepoint(sess, trans):  # pragma: no cover
        if trans.nested and not trans._parent.nested:
            nonlocal nested
            nested = connection.begin_nested()

    original_session = db.session
    db.session.remove()
    db.session = scoped

    try:
        yield scoped
    finally:
        scoped.remove()
        db.session = original_session
        outer.rollback()


@pytest.fixture()
def client(app, session):
    """Test client writing through the per-test transaction."""
    return app.test_client()


@pytest.fixture(scope="session")
def faker():
    """Seeded :class:`faker.Faker` for reproducible data."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


@pytest.fixture(autouse=True)
def _factories_session(session):
    """Point Factory Boy at the per-test session."""
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(session)
    yield
