from .dto import (
    ContactIn,
    OwnerIn,
    RegisteredRestaurantOut,
    RestaurantCreateIn,
    RestaurantOut,
    RestaurantRegisterIn,
)
from .service import RestaurantService

__all__ = [
    "RestaurantService",
    "ContactIn",
    "OwnerIn",
    "RestaurantCreateIn",
    "RestaurantRegisterIn",
    "RestaurantOut",
    "RegisteredRestaurantOut",
]
