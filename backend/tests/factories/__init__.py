"""Factory Boy base wired to the transactional test session.

Factories flush but never commit; tests that call services which roll back
on error commit their setup first so the rows survive the rollback.
"""

from __future__ import annotations

import factory


class SQLAlchemySession:
    """Hold the session installed by the ``_factories_session`` fixture."""

    _session = None

    @classmethod
    def set(cls, session):
        cls._session = session

    @classmethod
    def get(cls):
        """Return the registered session.

        Raises
        ------
        RuntimeError
            If a factory runs outside a test using the ``session`` fixture.
        """
        if cls._session is None:
            raise RuntimeError("Factories session not set. Did you pass the 'session' fixture?")
        return cls._session


class BaseFactory(factory.alchemy.SQLAlchemyModelFactory):
    """Abstract factory persisting through :class:`SQLAlchemySession`."""

    class Meta:
        abstract = True
        # A callable keeps the lookup lazy so each test sees its own session.
        sqlalchemy_session_factory = SQLAlchemySession.get
        sqlalchemy_session_persistence = "flush"

    @classmethod
    def _after_postgeneration(cls, instance, create, results=None):
        """Flush again so values set by post-generation hooks reach the row."""
        super()._after_postgeneration(instance, create, results)
        if create and results:
            SQLAlchemySession.get().flush()
