"""Staff authentication endpoints."""

from __future__ import annotations

from dataclasses import asdict

from flask import Blueprint

from delivery_auth.api.deps import (
    access_expiration_seconds,
    get_auth_service,
    json_response,
    load_json,
    request_device,
    timing,
)
from delivery_auth.schemas import RefreshSchema, StaffLoginSchema, TokenPairSchema
from delivery_auth.services._shared.dto import Role
from delivery_auth.services.auth import RefreshTokenIn, StaffLoginIn

bp = Blueprint("staff", __name__)

login_schema = StaffLoginSchema()
refresh_schema = RefreshSchema()
token_schema = TokenPairSchema()


@bp.post("/login")
@timing
def login():
    """Verify credentials inside a restaurant and issue a token pair."""

    data = load_json(login_schema)
    pair = get_auth_service().login_staff(
        StaffLoginIn(
            email=data["email"],
            password=data["password"],
            restaurant_id=data["restaurant_id"],
            device=request_device(),
        )
    )
    return json_response(token_schema.dump(asdict(pair)))


@bp.post("/refresh")
@timing
def refresh():
    data = load_json(refresh_schema)
    pair = get_auth_service().refresh_token(
        RefreshTokenIn(
            access_token=data["access_token"],
            refresh_token=data["refresh_token"],
            expiration_seconds=access_expiration_seconds(),
            role_override=Role.STAFF,
            device=request_device(),
        )
    )
    return json_response(token_schema.dump(asdict(pair)))
