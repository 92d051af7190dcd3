"""Staff repository scoped by restaurant."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select

from delivery_auth.models.staff import Staff
from delivery_auth.repositories.base import BaseRepository


class StaffRepository(BaseRepository[Staff]):
    """Persistence-only repository for :class:`Staff`.

    Staff emails are unique per restaurant, so every lookup by email is
    scoped by ``restaurant_id``.
    """

    model = Staff

    def get_by_email(self, email: str, restaurant_id: str) -> Staff | None:
        """Fetch a staff member by email inside a restaurant.

        :param email: Email address to normalise and search.
        :param restaurant_id: Owning restaurant.
        :returns: Staff member or ``None``.
        :rtype: Staff | None
        """
        stmt = select(Staff).where(
            Staff.email == email.lower().strip(),
            Staff.restaurant_id == restaurant_id,
        )
        return cast(Staff | None, self.session.execute(stmt).scalars().first())

    def exists_by_email(self, email: str, restaurant_id: str) -> bool:
        stmt = select(Staff.id).where(
            Staff.email == email.lower().strip(),
            Staff.restaurant_id == restaurant_id,
        )
        return bool(self.session.execute(stmt).first())

    def authenticate(self, email: str, password: str, restaurant_id: str) -> Staff | None:
        """Return the staff member when ``password`` matches, else ``None``."""
        staff = self.get_by_email(email, restaurant_id)
        if not staff or not staff.verify_password(password):
            return None
        return staff
