from __future__ import annotations

import pytest
from sqlalchemy import select

from delivery_auth.api.deps import get_access_token_service, get_restaurant_service
from delivery_auth.models import Restaurant, Staff
from delivery_auth.services._shared.dto import Role
from delivery_auth.services._shared.errors import RestaurantAlreadyExistsError
from delivery_auth.services.restaurants import (
    ContactIn,
    OwnerIn,
    RestaurantCreateIn,
    RestaurantRegisterIn,
)
from tests.factories.identities import RestaurantFactory
from tests.helpers.utils import sample_device


def _restaurant_in(vat_code: str = "ESB12345678") -> RestaurantCreateIn:
    return RestaurantCreateIn(
        vat_code=vat_code,
        name="Casa Pepe",
        legal_name="Casa Pepe S.L.",
        timezone_id="Europe/Madrid",
        contact=ContactIn(
            phone_prefix="+34",
            phone_number="600123123",
            email="Hola@CasaPepe.example.com",
            address="Calle Toledo 5",
            city="Madrid",
            postal_code="28005",
            country_code="ES",
        ),
    )


def _owner_in() -> OwnerIn:
    return OwnerIn(
        email="pepe@example.com",
        password="password123",
        name="Pepe",
        address="Calle Toledo 5",
        city="Madrid",
        postal_code="28005",
        country_code="ES",
    )


class TestRestaurantService:
    @pytest.fixture()
    def service(self):
        return get_restaurant_service()

    def test_create_exposes_contact_block(self, service):
        result = service.create(_restaurant_in())

        assert result.vat_code == "ESB12345678"
        assert result.tax_id == ""
        assert result.contact.email == "hola@casapepe.example.com"
        assert result.contact.phone_prefix == "+34"

    def test_duplicate_vat_code_raises(self, service):
        RestaurantFactory(vat_code="ESB12345678")

        with pytest.raises(RestaurantAlreadyExistsError):
            service.create(_restaurant_in())

    def test_register_creates_restaurant_owner_and_pair(self, service, session):
        registered = service.register(
            RestaurantRegisterIn(restaurant=_restaurant_in(), owner=_owner_in(), device=sample_device())
        )

        owner = session.get(Staff, registered.staff_owner.id)
        claims = get_access_token_service().validate_access_token(registered.tokens.access_token)
        assert owner.owner is True
        assert owner.restaurant_id == registered.restaurant.id
        assert claims.subject == owner.id
        assert claims.role is Role.STAFF
        assert claims.tenant == registered.restaurant.id

    def test_register_purges_restaurant_when_owner_fails(self, service, session, monkeypatch):
        def _boom(dto):
            raise RuntimeError("owner creation failed")

        monkeypatch.setattr(service.auth, "register_staff", _boom)

        with pytest.raises(RuntimeError):
            service.register(RestaurantRegisterIn(restaurant=_restaurant_in(), owner=_owner_in()))

        remaining = session.execute(
            select(Restaurant).filter_by(vat_code="ESB12345678")
        ).scalar_one_or_none()
        assert remaining is None
