"""Generic repository base for the identity and credential tables.

Repositories are persistence-only: they stage, load and delete rows and
flush so constraint violations surface inside the caller's Unit of Work.
They never commit or roll back and never mint credentials.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Generic, TypeVar, cast

from sqlalchemy.orm import Session

from delivery_auth.core.extensions import db

E = TypeVar("E")  # SQLAlchemy mapped entity type


class BaseRepository(Generic[E]):
    """Persistence helpers shared by every repository.

    Subclasses set ``model`` and may override :meth:`_updatable_fields` to
    allow profile updates through :meth:`update`.
    """

    #: SQLAlchemy mapped model (must be set by subclasses)
    model: type[E]

    def __init__(self, session: Session | None = None) -> None:
        """
        :param session: Session shared across the Unit of Work scope; the
            Flask-scoped ``db.session`` is used when omitted.
        :type session: :class:`sqlalchemy.orm.Session` | None
        """
        self._session: Session | None = session

    @property
    def session(self) -> Session:
        if self._session is not None:
            return self._session
        return cast(Session, db.session)

    def _updatable_fields(self) -> set[str]:
        """Keys :meth:`update` may assign; empty means read-only rows."""
        return set()

    # --------------------------------- CRUD ----------------------------------

    def add(self, instance: E) -> E:
        """Stage ``instance`` and flush so unique-constraint errors raise here."""
        self.session.add(instance)
        self.flush()
        return instance

    def get(self, entity_id: str) -> E | None:
        """Return the row with primary key ``entity_id`` or ``None``."""
        return self.session.get(self.model, entity_id)

    def delete(self, instance: E) -> None:
        """Hard-delete ``instance`` and flush."""
        self.session.delete(instance)
        self.flush()

    def flush(self) -> None:
        self.session.flush()

    def update(self, instance: E, **fields: Any) -> E:
        """Assign whitelisted ``fields`` on ``instance`` and flush.

        Assignment goes through ``setattr`` so the model's ``@validates``
        hooks normalise values.

        :raises ValueError: If a key is not in :meth:`_updatable_fields`.
        """
        self._check_updatable(fields)
        for key, value in fields.items():
            setattr(instance, key, value)
        self.flush()
        return instance

    def _check_updatable(self, fields: Mapping[str, Any]) -> None:
        allowed = self._updatable_fields()
        unknown = sorted(k for k in fields if k not in allowed)
        if unknown:
            raise ValueError(f"Unknown or non-updatable fields: {unknown}")
