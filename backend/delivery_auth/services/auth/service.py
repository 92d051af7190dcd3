# delivery_auth/services/auth/service.py
from __future__ import annotations

import logging

from delivery_auth.core.clock import Clock
from delivery_auth.services._shared.base import BaseService
from delivery_auth.services._shared.dto import Role, TokenPair
from delivery_auth.services._shared.errors import (
    InvalidCredentialsError,
    InvalidRefreshTokenError,
    InvalidTokenError,
    RefreshTokenNotFoundError,
    TokenMismatchError,
)
from delivery_auth.services._shared.ports.identities import CustomerDirectory, StaffDirectory
from delivery_auth.services.access_tokens.dto import GenerateTokenIn
from delivery_auth.services.access_tokens.service import AccessTokenService
from delivery_auth.services.auth.dto import (
    AuthConfig,
    CustomerLoginIn,
    CustomerRegisterIn,
    GenerateTokenPairIn,
    RefreshTokenIn,
    RegisteredCustomerOut,
    RegisteredStaffOut,
    StaffLoginIn,
    StaffRegisterIn,
)
from delivery_auth.services.refresh_tokens.dto import GenerateRefreshIn
from delivery_auth.services.refresh_tokens.service import RefreshTokenService

log = logging.getLogger(__name__)


class AuthService(BaseService):
    """
    Authentication facade (issue / refresh / register / login).

    Access tokens come from :class:`AccessTokenService`; refresh tokens and
    their persistence from :class:`RefreshTokenService`. Identities are
    created, verified and purged through the customer and staff directories.
    This is the only layer that maps refresh-store and token internals onto
    the external error taxonomy.
    """

    def __init__(
        self,
        *,
        access_tokens: AccessTokenService,
        refresh_tokens: RefreshTokenService,
        customers: CustomerDirectory,
        staff: StaffDirectory,
        clock: Clock | None = None,
        cfg: AuthConfig | None = None,
    ) -> None:
        super().__init__(clock=clock)
        self.access_tokens = access_tokens
        self.refresh_tokens = refresh_tokens
        self.customers = customers
        self.staff = staff
        self.cfg = cfg or AuthConfig()

    # ------------------------------------------------------------------ #
    # Token pair
    # ------------------------------------------------------------------ #

    def generate_token_pair(self, dto: GenerateTokenPairIn) -> TokenPair:
        """
        Mint an access token, then persist a refresh token for the same identity.

        A minting failure has no side effects. A persistence failure
        propagates and the minted access token is discarded.

        :raises ValueError: If the identity breaks the claim invariants.
        """
        access = self.access_tokens.generate_token(
            GenerateTokenIn(
                id=dto.user_id,
                role=dto.role,
                tenant_id=dto.tenant_id,
                expiration_seconds=dto.expiration_seconds,
            )
        )
        refresh = self.refresh_tokens.generate(
            GenerateRefreshIn(
                user_id=dto.user_id,
                role=dto.role,
                tenant_id=dto.tenant_id,
                device=dto.device,
            )
        )
        return TokenPair(
            access_token=access.access_token,
            refresh_token=refresh,
            expires_in=int(dto.expiration_seconds),
            token_type=access.token_type,
        )

    # ------------------------------------------------------------------ #
    # Refresh with grace window
    # ------------------------------------------------------------------ #

    def refresh_token(self, dto: RefreshTokenIn) -> TokenPair:
        """
        Rotate a token pair.

        The old refresh token is not revoked; its expiry is shortened to
        ``now + grace_window`` so that concurrent retries from the same
        client keep working briefly.

        :raises InvalidRefreshTokenError: If the refresh token is not usable.
        :raises TokenMismatchError: If the access token is unparsable or names
            a different identity than the refresh record.
        """
        try:
            record = self.refresh_tokens.find_active_token(dto.refresh_token)
        except RefreshTokenNotFoundError as exc:
            raise InvalidRefreshTokenError() from exc

        try:
            claims = self.access_tokens.get_claims(dto.access_token)
        except InvalidTokenError as exc:
            raise TokenMismatchError() from exc

        if (
            claims.subject != record.user_id
            or claims.role != record.role
            or claims.tenant != record.tenant_id
        ):
            log.warning(
                "Refresh rejected: access token identity differs from refresh record",
                extra={"user_id": record.user_id, "role": record.role.value},
            )
            raise TokenMismatchError()

        if dto.role_override is not None and Role(dto.role_override) != record.role:
            log.debug(
                "Ignoring role override %s; the refresh record is authoritative",
                Role(dto.role_override).value,
                extra={"user_id": record.user_id, "role": record.role.value},
            )

        pair = self.generate_token_pair(
            GenerateTokenPairIn(
                user_id=record.user_id,
                role=record.role,
                tenant_id=record.tenant_id,
                expiration_seconds=dto.expiration_seconds,
                device=dto.device,
            )
        )

        try:
            self.refresh_tokens.expire(dto.refresh_token, self.now() + self.cfg.grace_window)
        except RefreshTokenNotFoundError:
            # Another rotation already shortened or retired the record.
            log.info(
                "Refresh token already rotated",
                extra={"user_id": record.user_id, "role": record.role.value},
            )
        return pair

    # ------------------------------------------------------------------ #
    # Registration
    # ------------------------------------------------------------------ #

    def register_customer(self, dto: CustomerRegisterIn) -> RegisteredCustomerOut:
        """
        Create a customer and issue its bootstrap pair.

        If the pair cannot be issued the customer is purged and the issuing
        error is re-raised.
        """
        customer = self.customers.create(dto.customer)
        try:
            tokens = self._login_pair(customer.id, Role.CUSTOMER, "", dto.device)
        except Exception:
            self._purge_after_failure(self.customers.purge, customer.id, Role.CUSTOMER)
            raise
        log.info("Customer registered", extra={"user_id": customer.id, "role": "customer"})
        return RegisteredCustomerOut(customer=customer, tokens=tokens)

    def register_staff(self, dto: StaffRegisterIn) -> RegisteredStaffOut:
        """
        Create a staff member and issue its bootstrap pair.

        The tenant of the pair is the staff member's restaurant.
        """
        staff = self.staff.create(dto.staff)
        try:
            tokens = self._login_pair(staff.id, Role.STAFF, staff.restaurant_id, dto.device)
        except Exception:
            self._purge_after_failure(self.staff.purge, staff.id, Role.STAFF)
            raise
        log.info(
            "Staff registered",
            extra={"user_id": staff.id, "role": "staff", "tenant_id": staff.restaurant_id},
        )
        return RegisteredStaffOut(staff=staff, tokens=tokens)

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login_customer(self, dto: CustomerLoginIn) -> TokenPair:
        """:raises InvalidCredentialsError: If email or password do not match."""
        customer = self.customers.authenticate(dto.email, dto.password)
        if customer is None:
            raise InvalidCredentialsError()
        return self._login_pair(customer.id, Role.CUSTOMER, "", dto.device)

    def login_staff(self, dto: StaffLoginIn) -> TokenPair:
        """:raises InvalidCredentialsError: If the credentials do not match in that restaurant."""
        staff = self.staff.authenticate(dto.email, dto.password, dto.restaurant_id)
        if staff is None:
            raise InvalidCredentialsError()
        return self._login_pair(staff.id, Role.STAFF, staff.restaurant_id, dto.device)

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    def _login_pair(self, user_id: str, role: Role, tenant_id: str, device) -> TokenPair:
        return self.generate_token_pair(
            GenerateTokenPairIn(
                user_id=user_id,
                role=role,
                tenant_id=tenant_id,
                expiration_seconds=self.cfg.login_expiration_seconds,
                device=device,
            )
        )

    @staticmethod
    def _purge_after_failure(purge, user_id: str, role: Role) -> None:
        try:
            purge(user_id)
        except Exception:
            log.error(
                "Could not purge identity after failed registration; manual cleanup required",
                exc_info=True,
                extra={"user_id": user_id, "role": role.value},
            )
