"""
Meta Inspector Ajax Endpoint

POST /admin/ajax/meta_inspector_update_meta_value

Form fields: key, type, objectID, originalValue, newValue, nonce
(and valueKind, sent by the inline editor). Requires manage_options.
"""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.user import User
from app.permissions_config.permission_dependencies import capability_required
from app.permissions_config.permissions import MANAGE_OPTIONS
from app.schemas.meta import MetaUpdateResponse
from app.services import meta_update_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Meta Inspector"])

UPDATE_ACTION = "meta_inspector_update_meta_value"


@router.post(f"/{UPDATE_ACTION}", response_model=MetaUpdateResponse)
async def update_meta_value(
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(capability_required(MANAGE_OPTIONS)),
) -> MetaUpdateResponse:
    """
    Update one meta value edited inline in the inspector table.

    **Requires**: manage_options capability and a valid nonce
    """
    form = await request.form()
    return await meta_update_service.update_meta_value(db, form, current_user)
