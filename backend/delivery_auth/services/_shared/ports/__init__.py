"""
delivery_auth.services._shared.ports
====================================

*Ports* (hexagonal interfaces) the credential services depend on.

Modules
-------
- :mod:`refresh_token_store`:
    Defines :class:`~.RefreshTokenStore` and :class:`~.NewRefreshToken`, plus
    the lock-guarded :class:`~.InMemoryRefreshTokenStore` used by unit tests.
- :mod:`identities`:
    Defines the customer and staff collaborators the orchestrator uses to
    create, verify and purge identities.

Concrete adapters live under ``delivery_auth.infra`` and
``delivery_auth.services``.
"""

from __future__ import annotations

from .identities import CustomerDirectory, StaffDirectory
from .refresh_token_store import (
    STATUS_ACTIVE,
    STATUS_REVOKED,
    InMemoryRefreshTokenStore,
    NewRefreshToken,
    RefreshTokenStore,
)

__all__ = [
    "CustomerDirectory",
    "StaffDirectory",
    "RefreshTokenStore",
    "NewRefreshToken",
    "InMemoryRefreshTokenStore",
    "STATUS_ACTIVE",
    "STATUS_REVOKED",
]
