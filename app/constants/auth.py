"""
Authentication Constants

Signing parameters for admin session tokens and the cookie that carries them
to the edit screens and the inline editor's ajax calls.
"""

from decouple import config

from app.config import settings

# JWT Configuration, keyed off the same secret as the meta nonces
SECRET_KEY = settings.secret_key
ALGORITHM = config("JWT_ALGORITHM", default="HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = config(
    "ACCESS_TOKEN_EXPIRE_MINUTES", default=settings.access_token_expire_minutes, cast=int
)

# Browser sessions: the edit screens are plain page loads without an
# Authorization header, so the login route also sets this cookie
ACCESS_TOKEN_COOKIE = "access_token"
