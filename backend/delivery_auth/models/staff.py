"""Restaurant staff identity model."""

from __future__ import annotations

from sqlalchemy import Boolean, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from delivery_auth.core.extensions import db

from .base import HexIdMixin, PasswordMixin, ReprMixin, TimestampMixin, normalize_email


class Staff(HexIdMixin, PasswordMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Staff member of a restaurant.

    Fields
    ------
    restaurant_id : str
        Owning restaurant; becomes the ``tenant`` claim.
    owner : bool
        ``True`` for the account created together with the restaurant.
    email : str
        Login email, unique per restaurant.
    """

    __tablename__ = "staff"

    restaurant_id: Mapped[str] = mapped_column(
        String(24),
        ForeignKey("restaurants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    owner: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    email: Mapped[str] = mapped_column(String(254), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    address: Mapped[str] = mapped_column(String(100), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    postal_code: Mapped[str] = mapped_column(String(32), nullable=False)
    country_code: Mapped[str] = mapped_column(String(2), nullable=False)

    restaurant = relationship("Restaurant", lazy="joined")

    __table_args__ = (UniqueConstraint("email", "restaurant_id", name="uq_staff_email_restaurant"),)

    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        return normalize_email(value)

    @validates("country_code")
    def _normalize_country(self, key: str, value: str) -> str:
        return value.strip().upper()
