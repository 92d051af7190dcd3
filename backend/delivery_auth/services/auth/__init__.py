from .dto import (
    AuthConfig,
    CustomerLoginIn,
    CustomerRegisterIn,
    GenerateTokenPairIn,
    RefreshTokenIn,
    RegisteredCustomerOut,
    RegisteredStaffOut,
    StaffLoginIn,
    StaffRegisterIn,
)
from .service import AuthService

__all__ = [
    "AuthService",
    "AuthConfig",
    "GenerateTokenPairIn",
    "RefreshTokenIn",
    "CustomerRegisterIn",
    "StaffRegisterIn",
    "CustomerLoginIn",
    "StaffLoginIn",
    "RegisteredCustomerOut",
    "RegisteredStaffOut",
]
