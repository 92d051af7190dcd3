"""Restaurant registration schemas."""

from __future__ import annotations

from marshmallow import Schema, fields

from .common import (
    BaseSchema,
    country_code,
    email,
    nested,
    optional_text,
    password,
    postal_code,
    text,
    validate_phone_number,
    validate_phone_prefix,
    validate_timezone,
)
from .staff import StaffSchema


class ContactSchema(BaseSchema):
    """Restaurant contact block."""

    phone_prefix = text(max_length=5, rules=[validate_phone_prefix])
    phone_number = text(max_length=14, rules=[validate_phone_number])
    email = email()
    address = text(max_length=100)
    city = text(max_length=100)
    postal_code = postal_code()
    country_code = country_code()


class RestaurantFieldsSchema(BaseSchema):
    vat_code = text(max_length=40)
    name = text(max_length=100)
    legal_name = text(max_length=100)
    tax_id = optional_text(max_length=40)
    timezone_id = text(max_length=64, rules=[validate_timezone])
    contact = nested(ContactSchema)


class OwnerSchema(BaseSchema):
    """Credentials and profile of the restaurant owner."""

    email = email()
    password = password()
    name = text(max_length=100)
    address = text(max_length=100)
    city = text(max_length=100)
    postal_code = postal_code()
    country_code = country_code()


class RestaurantRegisterSchema(BaseSchema):
    """Payload for registering a restaurant together with its owner."""

    restaurant = nested(RestaurantFieldsSchema)
    staff_owner = nested(OwnerSchema)


class ContactOutSchema(Schema):
    phone_prefix = fields.String()
    phone_number = fields.String()
    email = fields.String()
    address = fields.String()
    city = fields.String()
    postal_code = fields.String()
    country_code = fields.String()


class RestaurantSchema(Schema):
    """Public representation of a restaurant."""

    id = fields.String(required=True)
    vat_code = fields.String(required=True)
    name = fields.String(required=True)
    legal_name = fields.String(required=True)
    tax_id = fields.String(required=True)
    timezone_id = fields.String(required=True)
    contact = fields.Nested(ContactOutSchema)
    created_at = fields.DateTime(required=True)
    updated_at = fields.DateTime(required=True)


class RestaurantRegisteredSchema(Schema):
    """Registration response."""

    restaurant = fields.Nested(RestaurantSchema)
    staff_owner = fields.Nested(StaffSchema)
