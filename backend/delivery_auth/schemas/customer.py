"""Customer resource schemas."""

from __future__ import annotations

from marshmallow import Schema, fields

from .common import BaseSchema, country_code, email, password, postal_code, text


class CustomerRegisterSchema(BaseSchema):
    """Payload for creating a customer account."""

    email = email()
    password = password()
    name = text(max_length=100)
    address = text(max_length=100)
    city = text(max_length=100)
    postal_code = postal_code()
    country_code = country_code()


class CustomerUpdateSchema(BaseSchema):
    """Payload for replacing the customer's delivery profile."""

    name = text(max_length=100)
    address = text(max_length=100)
    city = text(max_length=100)
    postal_code = postal_code()
    country_code = country_code()


class CustomerSchema(Schema):
    """Public representation of a customer."""

    id = fields.String(required=True)
    email = fields.String(required=True)
    name = fields.String(required=True)
    address = fields.String(required=True)
    city = fields.String(required=True)
    postal_code = fields.String(required=True)
    country_code = fields.String(required=True)
    created_at = fields.DateTime(required=True)
    updated_at = fields.DateTime(required=True)


class CustomerCreatedSchema(CustomerSchema):
    """Registration response (no ``updated_at``)."""

    class Meta:
        exclude = ("updated_at",)
