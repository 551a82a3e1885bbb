from .jwt import create_access_token, decode_access_token
from .password import MIN_PASSWORD_LENGTH, hash_password, verify_password

__all__ = [
    "create_access_token",
    "decode_access_token",
    "MIN_PASSWORD_LENGTH",
    "hash_password",
    "verify_password",
]
