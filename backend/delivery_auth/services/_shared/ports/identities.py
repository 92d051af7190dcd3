"""Identity collaborators the auth orchestrator delegates to."""

from __future__ import annotations

from typing import Protocol

from delivery_auth.services.customers.dto import CustomerCreateIn, CustomerOut
from delivery_auth.services.staff.dto import StaffCreateIn, StaffOut


class CustomerDirectory(Protocol):
    """Creates, verifies and purges customer identities."""

    def create(self, dto: CustomerCreateIn) -> CustomerOut: ...

    def authenticate(self, email: str, password: str) -> CustomerOut | None: ...

    def purge(self, customer_id: str) -> None: ...


class StaffDirectory(Protocol):
    """Creates, verifies and purges staff identities scoped by restaurant."""

    def create(self, dto: StaffCreateIn) -> StaffOut: ...

    def authenticate(self, email: str, password: str, restaurant_id: str) -> StaffOut | None: ...

    def purge(self, staff_id: str) -> None: ...
