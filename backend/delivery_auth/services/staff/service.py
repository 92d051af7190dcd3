"""
StaffService
============

Aggregate service for restaurant staff. Every lookup by email is scoped by
restaurant because the same email may work for several restaurants.
"""

from __future__ import annotations

from dataclasses import asdict

from sqlalchemy.exc import IntegrityError

from delivery_auth.models.staff import Staff
from delivery_auth.repositories.staff import StaffRepository
from delivery_auth.services._shared.base import BaseService
from delivery_auth.services._shared.errors import (
    NotFoundError,
    StaffAlreadyExistsError,
    violates,
)
from delivery_auth.services.staff.dto import StaffCreateIn, StaffOut


def to_staff_out(staff: Staff) -> StaffOut:
    return StaffOut(
        id=staff.id,
        restaurant_id=staff.restaurant_id,
        owner=staff.owner,
        email=staff.email,
        name=staff.name,
        address=staff.address,
        city=staff.city,
        postal_code=staff.postal_code,
        country_code=staff.country_code,
        created_at=staff.created_at,
        updated_at=staff.updated_at,
    )


class StaffService(BaseService):
    """Staff directory used by the auth orchestrator and restaurant registration."""

    def create(self, dto: StaffCreateIn) -> StaffOut:
        """
        Register a staff member.

        :raises NotFoundError: If the restaurant does not exist.
        :raises StaffAlreadyExistsError: If the email is taken in that restaurant.
        """
        now = self.now()
        with self.rw_uow() as uow:
            repo: StaffRepository = uow.staff

            if uow.restaurants.get(dto.restaurant_id) is None:
                raise NotFoundError("Restaurant", dto.restaurant_id)
            if repo.exists_by_email(dto.email, dto.restaurant_id):
                raise StaffAlreadyExistsError()

            try:
                staff = repo.model(**asdict(dto), created_at=now, updated_at=now)
                repo.add(staff)
            except IntegrityError as exc:
                if violates(exc, "uq_staff_email_restaurant") or violates(exc, "staff.email"):
                    raise StaffAlreadyExistsError() from exc
                raise

            return to_staff_out(staff)

    def authenticate(self, email: str, password: str, restaurant_id: str) -> StaffOut | None:
        """Return the staff member when credentials match inside the restaurant."""
        with self.ro_uow() as uow:
            staff = uow.staff.authenticate(email, password, restaurant_id)
            return to_staff_out(staff) if staff else None

    def get(self, staff_id: str) -> StaffOut:
        """:raises NotFoundError: If the staff member does not exist."""
        with self.ro_uow() as uow:
            staff = uow.staff.get(staff_id)
            if staff is None:
                raise NotFoundError("Staff", staff_id)
            return to_staff_out(staff)

    def purge(self, staff_id: str) -> None:
        """Hard-delete a staff member."""
        with self.rw_uow() as uow:
            staff = uow.staff.get(staff_id)
            if staff is None:
                raise NotFoundError("Staff", staff_id)
            uow.staff.delete(staff)
