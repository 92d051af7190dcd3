from delivery_auth.models.customer import Customer
from delivery_auth.models.refresh_token import RefreshToken, RefreshTokenStatus
from delivery_auth.models.restaurant import Restaurant
from delivery_auth.models.staff import Staff

__all__ = [
    "Customer",
    "RefreshToken",
    "RefreshTokenStatus",
    "Restaurant",
    "Staff",
]
