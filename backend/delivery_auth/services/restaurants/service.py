"""
RestaurantService
=================

Registers a restaurant together with its owner account. The owner goes
through the auth orchestrator so that it receives a bootstrap token pair;
if that step fails the restaurant is purged again.
"""

from __future__ import annotations

import logging
from dataclasses import asdict

from sqlalchemy.exc import IntegrityError

from delivery_auth.core.clock import Clock
from delivery_auth.models.restaurant import Restaurant
from delivery_auth.repositories.restaurant import RestaurantRepository
from delivery_auth.services._shared.base import BaseService
from delivery_auth.services._shared.errors import (
    NotFoundError,
    RestaurantAlreadyExistsError,
    violates,
)
from delivery_auth.services.auth.dto import StaffRegisterIn
from delivery_auth.services.auth.service import AuthService
from delivery_auth.services.restaurants.dto import (
    ContactIn,
    RegisteredRestaurantOut,
    RestaurantCreateIn,
    RestaurantOut,
    RestaurantRegisterIn,
)
from delivery_auth.services.staff.dto import StaffCreateIn

log = logging.getLogger(__name__)


def to_restaurant_out(restaurant: Restaurant) -> RestaurantOut:
    return RestaurantOut(
        id=restaurant.id,
        vat_code=restaurant.vat_code,
        name=restaurant.name,
        legal_name=restaurant.legal_name,
        tax_id=restaurant.tax_id,
        timezone_id=restaurant.timezone_id,
        contact=ContactIn(**restaurant.contact),
        created_at=restaurant.created_at,
        updated_at=restaurant.updated_at,
    )


class RestaurantService(BaseService):
    """Application service for the ``Restaurant`` aggregate."""

    def __init__(self, *, auth: AuthService, clock: Clock | None = None) -> None:
        super().__init__(clock=clock)
        self.auth = auth

    def create(self, dto: RestaurantCreateIn) -> RestaurantOut:
        """
        Create a restaurant.

        :raises RestaurantAlreadyExistsError: If the VAT code is taken.
        """
        now = self.now()
        with self.rw_uow() as uow:
            repo: RestaurantRepository = uow.restaurants

            if repo.exists_by_vat_code(dto.vat_code):
                raise RestaurantAlreadyExistsError()

            values = asdict(dto)
            contact = values.pop("contact")
            try:
                restaurant = repo.model(**values, created_at=now, updated_at=now)
                restaurant.contact = contact
                repo.add(restaurant)
            except IntegrityError as exc:
                if violates(exc, "uq_restaurants_vat_code") or violates(exc, "restaurants.vat_code"):
                    raise RestaurantAlreadyExistsError() from exc
                raise

            return to_restaurant_out(restaurant)

    def get(self, restaurant_id: str) -> RestaurantOut:
        """:raises NotFoundError: If the restaurant does not exist."""
        with self.ro_uow() as uow:
            restaurant = uow.restaurants.get(restaurant_id)
            if restaurant is None:
                raise NotFoundError("Restaurant", restaurant_id)
            return to_restaurant_out(restaurant)

    def purge(self, restaurant_id: str) -> None:
        """Hard-delete a restaurant."""
        with self.rw_uow() as uow:
            restaurant = uow.restaurants.get(restaurant_id)
            if restaurant is None:
                raise NotFoundError("Restaurant", restaurant_id)
            uow.restaurants.delete(restaurant)

    def register(self, dto: RestaurantRegisterIn) -> RegisteredRestaurantOut:
        """
        Create the restaurant, then its owner with a bootstrap pair.

        :raises RestaurantAlreadyExistsError: If the VAT code is taken.
        :raises StaffAlreadyExistsError: Never in practice for a new
            restaurant, but propagated after purging if raised.
        """
        restaurant = self.create(dto.restaurant)
        try:
            registered = self.auth.register_staff(
                StaffRegisterIn(
                    staff=StaffCreateIn(restaurant_id=restaurant.id, owner=True, **asdict(dto.owner)),
                    device=dto.device,
                )
            )
        except Exception:
            try:
                self.purge(restaurant.id)
            except Exception:
                log.error(
                    "Could not purge restaurant after failed owner registration",
                    exc_info=True,
                    extra={"tenant_id": restaurant.id},
                )
            raise

        log.info(
            "Restaurant registered",
            extra={"tenant_id": restaurant.id, "user_id": registered.staff.id},
        )
        return RegisteredRestaurantOut(
            restaurant=restaurant,
            staff_owner=registered.staff,
            tokens=registered.tokens,
        )
