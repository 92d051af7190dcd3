"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import Schema, fields

from .common import BaseSchema, email, password, text


class CustomerLoginSchema(BaseSchema):
    """Input payload for customer login."""

    email = email()
    password = password()


class StaffLoginSchema(BaseSchema):
    """Input payload for staff login inside one restaurant."""

    email = email()
    password = password()
    restaurant_id = text(max_length=24)


class RefreshSchema(BaseSchema):
    """Input payload for rotating a token pair."""

    access_token = text()
    refresh_token = text()


class TokenPairSchema(Schema):
    """Response payload with an access/refresh pair."""

    access_token = fields.String(required=True)
    refresh_token = fields.String(required=True)
    expires_in = fields.Integer(required=True)
    token_type = fields.String(required=True)
