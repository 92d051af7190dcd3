"""Staff resource schemas."""

from __future__ import annotations

from marshmallow import Schema, fields


class StaffSchema(Schema):
    """Public representation of a staff member."""

    id = fields.String(required=True)
    owner = fields.Boolean(required=True)
    email = fields.String(required=True)
    name = fields.String(required=True)
    address = fields.String(required=True)
    city = fields.String(required=True)
    postal_code = fields.String(required=True)
    country_code = fields.String(required=True)
    created_at = fields.DateTime(required=True)
    updated_at = fields.DateTime(required=True)
