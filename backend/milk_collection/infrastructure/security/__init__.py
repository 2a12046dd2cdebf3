from .bcrypt_password_hasher import BcryptPasswordHasher
from .jwt_token_provider import JWTTokenProvider

__all__ = [
    "BcryptPasswordHasher",
    "JWTTokenProvider",
]
