from .dto import GenerateTokenIn, TokenOut
from .service import ALGORITHM, AccessTokenService

__all__ = ["AccessTokenService", "GenerateTokenIn", "TokenOut", "ALGORITHM"]
