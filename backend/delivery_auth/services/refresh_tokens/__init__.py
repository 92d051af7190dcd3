from .dto import GenerateRefreshIn
from .service import DEFAULT_TOKEN_EXPIRATION, RefreshTokenService, new_refresh_token

__all__ = ["RefreshTokenService", "GenerateRefreshIn", "DEFAULT_TOKEN_EXPIRATION", "new_refresh_token"]
