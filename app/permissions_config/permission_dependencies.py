import logging

from fastapi import Depends

from app.auth import get_current_user
from app.exceptions import AuthorizationError
from app.permissions_config.permissions import user_can

logger = logging.getLogger(__name__)


def capability_required(capability: str):
    async def checker(current_user=Depends(get_current_user)):
        if user_can(current_user, capability):
            return current_user
        logger.warning(f"User {current_user.id} lacks capability '{capability}'")
        raise AuthorizationError(required_permission=capability)

    return checker
