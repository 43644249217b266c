"""
Meta Inspector Plugin

Shows every meta key/value stored on a post, taxonomy term or user at the
bottom of its admin edit screen, and lets administrators edit values inline.

  - app/services/meta_service.py        (reading and conditional updates)
  - app/services/meta_table.py          (table markup)
  - app/services/meta_update_service.py (inline edit endpoint logic)
  - app/static/meta_inspector.js        (browser editor)

Only users holding the ``manage_options`` capability ever reach this plugin;
for everyone else the registry never calls it.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from app.permissions_config.permissions import MANAGE_OPTIONS
from app.plugins.base import PluginBase, PluginMeta
from app.plugins.hooks import (
    HOOK_ADMIN_POST_META_BOXES,
    HOOK_ADMIN_TERM_EDIT_FORM,
    HOOK_ADMIN_USER_EDIT_PROFILE,
    HOOK_ADMIN_USER_SHOW_PROFILE,
)
from app.schemas.meta import EntityRef, EntityType
from app.services import meta_service
from app.services.meta_table import render_meta_table
from app.utils.nonce import create_nonce, nonce_scope

logger = logging.getLogger(__name__)

_META = PluginMeta(
    name="meta_inspector",
    version="1.0.0",
    description="See all meta data on posts, terms and users, and edit values inline",
    hooks=[
        HOOK_ADMIN_POST_META_BOXES,
        HOOK_ADMIN_TERM_EDIT_FORM,
        HOOK_ADMIN_USER_EDIT_PROFILE,
        HOOK_ADMIN_USER_SHOW_PROFILE,
    ],
    capability=MANAGE_OPTIONS,
)

TITLES = {
    EntityType.POST: "Post Meta Inspector",
    EntityType.TERM: "Term Meta",
    EntityType.USER: "User Meta",
}


def _absint(value: Any) -> int | None:
    try:
        number = abs(int(value))
    except (TypeError, ValueError):
        return None
    return number or None


def resolve_entity(hook_name: str, payload: Mapping[str, Any]) -> EntityRef | None:
    """
    Work out which object a screen is showing.

    Posts come from the screen's post, terms from the ``tag_ID`` query
    parameter, users from the logged-in user on their own profile page or
    from the ``user_id`` query parameter.
    """
    query = payload.get("query") or {}

    if hook_name == HOOK_ADMIN_POST_META_BOXES:
        post = payload.get("post")
        object_id = _absint(post.id if post is not None else payload.get("post_id"))
        entity_type = EntityType.POST

    elif hook_name == HOOK_ADMIN_TERM_EDIT_FORM:
        object_id = _absint(query.get("tag_ID"))
        entity_type = EntityType.TERM

    elif hook_name in (HOOK_ADMIN_USER_EDIT_PROFILE, HOOK_ADMIN_USER_SHOW_PROFILE):
        if payload.get("is_profile_page"):
            object_id = payload["user"].id
        else:
            object_id = _absint(query.get("user_id"))
        entity_type = EntityType.USER

    else:
        return None

    if object_id is None:
        return None
    return EntityRef(type=entity_type, object_id=object_id)


class MetaInspectorPlugin(PluginBase):
    """Renders the meta inspector table on admin edit screens."""

    @property
    def meta(self) -> PluginMeta:
        return _META

    async def on_load(self, config: dict[str, Any]) -> None:
        self._config = config
        logger.debug("MetaInspectorPlugin loaded")

    async def handle_hook(self, hook_name: str, payload: dict[str, Any]) -> Any:
        entity = resolve_entity(hook_name, payload)
        if entity is None:
            return None

        meta = await meta_service.get_meta(payload["db"], entity.type, entity.object_id)
        nonce = create_nonce(nonce_scope(entity.type.value), payload["user"].id)
        return render_meta_table(entity, meta, nonce, title=TITLES[entity.type])
