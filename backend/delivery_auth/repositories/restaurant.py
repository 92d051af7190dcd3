"""Restaurant repository."""

from __future__ import annotations

from sqlalchemy import select

from delivery_auth.models.restaurant import Restaurant
from delivery_auth.repositories.base import BaseRepository


class RestaurantRepository(BaseRepository[Restaurant]):
    """Persistence-only repository for :class:`Restaurant`."""

    model = Restaurant

    def exists_by_vat_code(self, vat_code: str) -> bool:
        stmt = select(Restaurant.id).where(Restaurant.vat_code == vat_code.strip())
        return bool(self.session.execute(stmt).first())
