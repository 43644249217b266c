"""
Anti-forgery tokens ("nonces") for admin actions.

A nonce is a signed, timestamped token bound to one action scope (for
example ``update-meta-post``) and to the user it was issued for. It is
created when a screen is rendered and checked when the screen posts back.
"""

import logging
import secrets

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from app.config import settings

logger = logging.getLogger(__name__)


def nonce_scope(entity_type: str | None) -> str:
    """Return the action scope for meta updates on one entity type."""
    return f"{settings.nonce_namespace}-{entity_type or ''}"


def _serializer(action: str, secret_key: str | None = None) -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(secret_key or settings.secret_key, salt=action)


def create_nonce(action: str, user_id: int, secret_key: str | None = None) -> str:
    """Generate a new nonce for ``action`` on behalf of ``user_id``."""
    payload = {"uid": user_id, "r": secrets.token_urlsafe(8)}
    return _serializer(action, secret_key).dumps(payload)


def verify_nonce(
    token: str | None,
    action: str,
    user_id: int,
    max_age: int | None = None,
    secret_key: str | None = None,
) -> bool:
    """Validate a nonce for ``action`` and ``user_id``."""
    if not token or not isinstance(token, str):
        return False
    try:
        payload = _serializer(action, secret_key).loads(
            token, max_age=max_age if max_age is not None else settings.nonce_lifetime
        )
    except SignatureExpired:
        logger.info(f"Expired nonce for action '{action}'")
        return False
    except BadSignature:
        logger.info(f"Bad nonce signature for action '{action}'")
        return False

    return isinstance(payload, dict) and payload.get("uid") == user_id
