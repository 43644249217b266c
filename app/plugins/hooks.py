"""
Plugin Hook Constants

Centralised list of hook names that plugins can subscribe to.
Hook names follow the `category.action` convention.

Admin screen hooks are fired while a screen is rendered; a subscriber may
return an HTML fragment to be placed on the page. Event hooks are fired
after a change and their return values are ignored.
"""

from __future__ import annotations

# ── Admin screens ─────────────────────────────────────────────────────────────
HOOK_ADMIN_POST_META_BOXES = "admin.post.meta_boxes"
HOOK_ADMIN_TERM_EDIT_FORM = "admin.term.edit_form"
HOOK_ADMIN_USER_EDIT_PROFILE = "admin.user.edit_profile"
HOOK_ADMIN_USER_SHOW_PROFILE = "admin.user.show_profile"

# ── Meta events ───────────────────────────────────────────────────────────────
HOOK_META_UPDATED = "meta.updated"

# ── Master list ───────────────────────────────────────────────────────────────
ADMIN_SCREEN_HOOKS: list[str] = [
    HOOK_ADMIN_POST_META_BOXES,
    HOOK_ADMIN_TERM_EDIT_FORM,
    HOOK_ADMIN_USER_EDIT_PROFILE,
    HOOK_ADMIN_USER_SHOW_PROFILE,
]

ALL_HOOKS: list[str] = [
    *ADMIN_SCREEN_HOOKS,
    HOOK_META_UPDATED,
]
