"""
Meta Update Handler

Validates an inline edit posted by the inspector, checks its nonce, turns
the displayed values back into stored values and performs the conditional
update. A successful update fires the ``meta.updated`` hook.

Response bodies:
    {"success": true,  "data": {"newValue": "<text>"}}
    {"success": false, "data": {"<field>": "<message>", ...}}
"""

import logging
from typing import Any, Mapping

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.plugins.hooks import HOOK_META_UPDATED
from app.plugins.registry import plugin_registry
from app.schemas.meta import MetaUpdateResponse, validate_update_form
from app.services import meta_service
from app.services.meta_values import MetaValueError, RawValue, decode_wire_value
from app.utils.nonce import nonce_scope, verify_nonce
from app.utils.sanitize import sanitize_meta_value

logger = logging.getLogger(__name__)

PERSISTENCE_CONFLICT = "persistence_conflict"
PERSISTENCE_CONFLICT_MESSAGE = "Meta data failed to update."


def _failure(errors: dict[str, str]) -> MetaUpdateResponse:
    return MetaUpdateResponse(success=False, data=errors)


async def update_meta_value(db: AsyncSession, form: Mapping[str, Any], user: User) -> MetaUpdateResponse:
    """
    Handle one inline edit.

    Args:
        db (AsyncSession): The database session.
        form: The posted form fields (key, type, objectID, originalValue,
            newValue, nonce and optionally valueKind).
        user (User): The administrator making the edit.

    Returns:
        MetaUpdateResponse: success with the stored text, or the field errors.
    """
    validation = validate_update_form(form)
    errors = dict(validation.errors)

    # The nonce is checked even when other fields are missing
    if not verify_nonce(form.get("nonce"), nonce_scope(form.get("type")), user.id):
        errors["nonce"] = "Invalid nonce"

    if errors:
        logger.warning(f"Rejected meta update from user {user.id}: {sorted(errors)}")
        return _failure(errors)

    request = validation.request
    new_text = sanitize_meta_value(request.new_value)

    try:
        original = decode_wire_value(request.original_value, request.value_kind)
    except MetaValueError:
        return _failure({"originalValue": "Invalid originalValue"})

    # Untagged requests store the submitted text as is
    if request.value_kind is None:
        new = RawValue(new_text)
    else:
        try:
            new = decode_wire_value(new_text, request.value_kind)
        except MetaValueError:
            return _failure({"newValue": "Invalid newValue"})

    updated = await meta_service.update_meta(
        db,
        request.type,
        request.object_id,
        request.key,
        new.value,
        original.value,
    )

    if updated is not True:
        return _failure({PERSISTENCE_CONFLICT: PERSISTENCE_CONFLICT_MESSAGE})

    logger.info(f"User {user.id} updated {request.type.value} meta '{request.key}' on object {request.object_id}")
    await plugin_registry.fire_hook(
        HOOK_META_UPDATED,
        {
            "user": user,
            "type": request.type,
            "object_id": request.object_id,
            "key": request.key,
            "new_value": new.value,
        },
    )
    return MetaUpdateResponse(success=True, data={"newValue": new_text})
