"""Restaurant (tenant) model."""

from __future__ import annotations

from typing import Any

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, validates

from delivery_auth.core.extensions import db

from .base import HexIdMixin, ReprMixin, TimestampMixin, normalize_email

CONTACT_FIELDS = (
    "phone_prefix",
    "phone_number",
    "email",
    "address",
    "city",
    "postal_code",
    "country_code",
)


class Restaurant(HexIdMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Restaurant owning a set of staff members.

    The restaurant id is the ``tenant`` claim carried by staff access tokens.
    Contact details are stored flattened with a ``contact_`` prefix and
    exposed as a mapping through :attr:`contact`.
    """

    __tablename__ = "restaurants"

    vat_code: Mapped[str] = mapped_column(String(40), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    legal_name: Mapped[str] = mapped_column(String(100), nullable=False)
    tax_id: Mapped[str] = mapped_column(String(40), nullable=False, default="")
    timezone_id: Mapped[str] = mapped_column(String(64), nullable=False)

    contact_phone_prefix: Mapped[str] = mapped_column(String(5), nullable=False)
    contact_phone_number: Mapped[str] = mapped_column(String(14), nullable=False)
    contact_email: Mapped[str] = mapped_column(String(254), nullable=False)
    contact_address: Mapped[str] = mapped_column(String(100), nullable=False)
    contact_city: Mapped[str] = mapped_column(String(100), nullable=False)
    contact_postal_code: Mapped[str] = mapped_column(String(32), nullable=False)
    contact_country_code: Mapped[str] = mapped_column(String(2), nullable=False)

    __table_args__ = (UniqueConstraint("vat_code", name="uq_restaurants_vat_code"),)

    @property
    def contact(self) -> dict[str, Any]:
        """Return the contact block keyed by its public field names."""
        return {name: getattr(self, f"contact_{name}") for name in CONTACT_FIELDS}

    @contact.setter
    def contact(self, values: dict[str, Any]) -> None:
        for name in CONTACT_FIELDS:
            if name in values:
                setattr(self, f"contact_{name}", values[name])

    @validates("contact_email")
    def _normalize_contact_email(self, key: str, value: str) -> str:
        return normalize_email(value)

    @validates("vat_code")
    def _normalize_vat_code(self, key: str, value: str) -> str:
        v = (value or "").strip()
        if not v:
            raise ValueError("VAT code is required.")
        return v
