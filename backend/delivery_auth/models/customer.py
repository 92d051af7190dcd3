"""Customer identity model (credentials plus delivery profile)."""

from __future__ import annotations

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, validates

from delivery_auth.core.extensions import db

from .base import HexIdMixin, PasswordMixin, ReprMixin, TimestampMixin, normalize_email


class Customer(HexIdMixin, PasswordMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Customer account able to log in and order.

    Fields
    ------
    email : str
        Login email. Stored normalized (lowercase, trimmed). Unique.
    password_hash : str
        Hashed password (write-only setter via ``password``).
    name, address, city, postal_code, country_code : str
        Delivery profile.
    """

    __tablename__ = "customers"

    email: Mapped[str] = mapped_column(String(254), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    address: Mapped[str] = mapped_column(String(100), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    postal_code: Mapped[str] = mapped_column(String(32), nullable=False)
    country_code: Mapped[str] = mapped_column(String(2), nullable=False)

    __table_args__ = (UniqueConstraint("email", name="uq_customers_email"),)

    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        return normalize_email(value)

    @validates("country_code")
    def _normalize_country(self, key: str, value: str) -> str:
        return value.strip().upper()
