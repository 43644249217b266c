"""Constants package for Meta Inspector."""

from .auth import ACCESS_TOKEN_COOKIE, ACCESS_TOKEN_EXPIRE_MINUTES, ALGORITHM, SECRET_KEY
from .roles import RoleName

__all__ = [
    # Role constants
    "RoleName",
    # Auth constants
    "SECRET_KEY",
    "ALGORITHM",
    "ACCESS_TOKEN_EXPIRE_MINUTES",
    "ACCESS_TOKEN_COOKIE",
]
