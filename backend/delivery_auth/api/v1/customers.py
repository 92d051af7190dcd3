"""Customer registration, authentication and profile endpoints."""

from __future__ import annotations

from dataclasses import asdict

from flask import Blueprint

from delivery_auth.api.deps import (
    access_expiration_seconds,
    get_auth_service,
    get_customer_service,
    json_response,
    load_json,
    request_device,
    timing,
)
from delivery_auth.api.security import require_role, require_subject_match
from delivery_auth.schemas import (
    CustomerCreatedSchema,
    CustomerLoginSchema,
    CustomerRegisterSchema,
    CustomerSchema,
    CustomerUpdateSchema,
    RefreshSchema,
    TokenPairSchema,
)
from delivery_auth.services._shared.dto import Role
from delivery_auth.services.auth import CustomerLoginIn, CustomerRegisterIn, RefreshTokenIn
from delivery_auth.services.customers import CustomerCreateIn, CustomerUpdateIn

bp = Blueprint("customers", __name__)

register_schema = CustomerRegisterSchema()
update_schema = CustomerUpdateSchema()
login_schema = CustomerLoginSchema()
refresh_schema = RefreshSchema()
created_schema = CustomerCreatedSchema()
customer_schema = CustomerSchema()
token_schema = TokenPairSchema()


@bp.post("")
@timing
def register():
    """Create a customer; the bootstrap pair stays server-side."""

    data = load_json(register_schema)
    registered = get_auth_service().register_customer(
        CustomerRegisterIn(customer=CustomerCreateIn(**data), device=request_device())
    )
    return json_response(created_schema.dump(registered.customer), status=201)


@bp.post("/login")
@timing
def login():
    """Verify credentials and issue a token pair."""

    data = load_json(login_schema)
    pair = get_auth_service().login_customer(
        CustomerLoginIn(email=data["email"], password=data["password"], device=request_device())
    )
    return json_response(token_schema.dump(asdict(pair)))


@bp.post("/refresh")
@timing
def refresh():
    """Rotate a token pair (old refresh token stays valid for the grace window)."""

    data = load_json(refresh_schema)
    pair = get_auth_service().refresh_token(
        RefreshTokenIn(
            access_token=data["access_token"],
            refresh_token=data["refresh_token"],
            expiration_seconds=access_expiration_seconds(),
            role_override=Role.CUSTOMER,
            device=request_device(),
        )
    )
    return json_response(token_schema.dump(asdict(pair)))


@bp.get("/<string:customer_id>")
@require_role(Role.CUSTOMER)
@timing
def get_customer(customer_id: str):
    """Return the caller's own profile."""

    require_subject_match(customer_id)
    customer = get_customer_service().get(customer_id)
    return json_response(customer_schema.dump(customer))


@bp.put("/<string:customer_id>")
@require_role(Role.CUSTOMER)
@timing
def update_customer(customer_id: str):
    """Replace the caller's delivery profile."""

    require_subject_match(customer_id)
    data = load_json(update_schema)
    customer = get_customer_service().update(customer_id, CustomerUpdateIn(**data))
    return json_response(customer_schema.dump(customer))
