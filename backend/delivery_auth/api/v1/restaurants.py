"""Restaurant registration endpoint."""

from __future__ import annotations

from flask import Blueprint

from delivery_auth.api.deps import (
    get_restaurant_service,
    json_response,
    load_json,
    request_device,
    timing,
)
from delivery_auth.schemas import RestaurantRegisteredSchema, RestaurantRegisterSchema
from delivery_auth.services.restaurants import (
    ContactIn,
    OwnerIn,
    RestaurantCreateIn,
    RestaurantRegisterIn,
)

bp = Blueprint("restaurants", __name__)

register_schema = RestaurantRegisterSchema()
registered_schema = RestaurantRegisteredSchema()


@bp.post("")
@timing
def register():
    """Create a restaurant and its owner account."""

    data = load_json(register_schema)
    restaurant = dict(data["restaurant"])
    contact = ContactIn(**restaurant.pop("contact"))
    registered = get_restaurant_service().register(
        RestaurantRegisterIn(
            restaurant=RestaurantCreateIn(contact=contact, **restaurant),
            owner=OwnerIn(**data["staff_owner"]),
            device=request_device(),
        )
    )
    body = registered_schema.dump(
        {"restaurant": registered.restaurant, "staff_owner": registered.staff_owner}
    )
    return json_response(body, status=201)
