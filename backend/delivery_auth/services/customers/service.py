"""
CustomerService
===============

Aggregate service for the ``Customer`` identity:

- Creation with email uniqueness
- Credential verification (no token issuance)
- Profile retrieval and update
- Purge, used to undo a registration whose credentials could not be issued
"""

from __future__ import annotations

from dataclasses import asdict

from sqlalchemy.exc import IntegrityError

from delivery_auth.models.customer import Customer
from delivery_auth.repositories.customer import CustomerRepository
from delivery_auth.services._shared.base import BaseService
from delivery_auth.services._shared.errors import (
    CustomerAlreadyExistsError,
    NotFoundError,
    violates,
)
from delivery_auth.services.customers.dto import CustomerCreateIn, CustomerOut, CustomerUpdateIn


def to_customer_out(customer: Customer) -> CustomerOut:
    return CustomerOut(
        id=customer.id,
        email=customer.email,
        name=customer.name,
        address=customer.address,
        city=customer.city,
        postal_code=customer.postal_code,
        country_code=customer.country_code,
        created_at=customer.created_at,
        updated_at=customer.updated_at,
    )


class CustomerService(BaseService):
    """
    Application service for the ``Customer`` aggregate.

    Implements the customer directory the auth orchestrator depends on
    (``create``, ``authenticate``, ``purge``).
    """

    def create(self, dto: CustomerCreateIn) -> CustomerOut:
        """
        Register a new customer.

        :param dto: Creation input.
        :type dto: CustomerCreateIn
        :returns: Public-safe customer DTO.
        :rtype: CustomerOut
        :raises CustomerAlreadyExistsError: When the email is taken.
        """
        now = self.now()
        with self.rw_uow() as uow:
            repo: CustomerRepository = uow.customers

            if repo.exists_by_email(dto.email):
                raise CustomerAlreadyExistsError()

            try:
                customer = repo.model(**asdict(dto), created_at=now, updated_at=now)
                repo.add(customer)
            except IntegrityError as exc:
                if violates(exc, "uq_customers_email") or violates(exc, "customers.email"):
                    raise CustomerAlreadyExistsError() from exc
                raise

            return to_customer_out(customer)

    def authenticate(self, email: str, password: str) -> CustomerOut | None:
        """Return the customer when credentials match, else ``None``."""
        with self.ro_uow() as uow:
            customer = uow.customers.authenticate(email, password)
            return to_customer_out(customer) if customer else None

    def get(self, customer_id: str) -> CustomerOut:
        """
        Retrieve a customer by identifier.

        :raises NotFoundError: If the customer does not exist.
        """
        with self.ro_uow() as uow:
            customer = uow.customers.get(customer_id)
            if customer is None:
                raise NotFoundError("Customer", customer_id)
            return to_customer_out(customer)

    def update(self, customer_id: str, dto: CustomerUpdateIn) -> CustomerOut:
        """
        Update profile fields; email and password are not updatable here.

        :raises NotFoundError: If the customer does not exist.
        """
        with self.rw_uow() as uow:
            repo: CustomerRepository = uow.customers
            customer = repo.get(customer_id)
            if customer is None:
                raise NotFoundError("Customer", customer_id)

            updates = {k: v for k, v in asdict(dto).items() if v is not None}
            if updates:
                repo.update(customer, **updates)
                customer.updated_at = self.now()
                repo.flush()
            return to_customer_out(customer)

    def purge(self, customer_id: str) -> None:
        """
        Hard-delete a customer.

        :raises NotFoundError: If the customer does not exist.
        """
        with self.rw_uow() as uow:
            customer = uow.customers.get(customer_id)
            if customer is None:
                raise NotFoundError("Customer", customer_id)
            uow.customers.delete(customer)
