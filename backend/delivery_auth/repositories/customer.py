"""Customer repository for persistence and authentication utilities."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select

from delivery_auth.models.customer import Customer
from delivery_auth.repositories.base import BaseRepository


class CustomerRepository(BaseRepository[Customer]):
    """Persistence-only repository for :class:`Customer`.

    It NEVER issues tokens; it only stores and verifies credentials.
    """

    model = Customer

    def _updatable_fields(self):
        """Profile fields a customer may change (not email, not password)."""
        return {"name", "address", "city", "postal_code", "country_code"}

    def get_by_email(self, email: str) -> Customer | None:
        """Fetch a customer by email (case-insensitive).

        :param email: Email address to normalise and search.
        :type email: str
        :returns: Customer or ``None`` when not found.
        :rtype: Customer | None
        """
        stmt = select(Customer).where(Customer.email == email.lower().strip())
        return cast(Customer | None, self.session.execute(stmt).scalars().first())

    def exists_by_email(self, email: str) -> bool:
        stmt = select(Customer.id).where(Customer.email == email.lower().strip())
        return bool(self.session.execute(stmt).first())

    def authenticate(self, email: str, password: str) -> Customer | None:
        """Return the customer when ``password`` matches, else ``None``."""
        customer = self.get_by_email(email)
        if not customer or not customer.verify_password(password):
            return None
        return customer
