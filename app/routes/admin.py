"""
Admin Edit Screens

Minimal edit screens for posts, taxonomy terms and users. Each screen fires
its admin hook and places the fragments returned by plugins on the page.

GET /admin/posts/{post_id}/edit           → post edit screen
GET /admin/terms/edit?taxonomy=&tag_ID=   → term edit screen
GET /admin/profile                        → own profile screen
GET /admin/users/edit?user_id=            → another user's profile screen
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.auth import get_current_user
from app.config import settings
from app.database import get_db
from app.exceptions import ContentNotFoundError, TermNotFoundError, UserNotFoundError
from app.models.content import Content
from app.models.term import Term
from app.models.user import User
from app.permissions_config.permission_dependencies import capability_required
from app.plugins.hooks import (
    HOOK_ADMIN_POST_META_BOXES,
    HOOK_ADMIN_TERM_EDIT_FORM,
    HOOK_ADMIN_USER_EDIT_PROFILE,
    HOOK_ADMIN_USER_SHOW_PROFILE,
)
from app.plugins.registry import plugin_registry
from app.services.meta_table import TEMPLATE_DIR

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Admin"])
templates = Jinja2Templates(directory=str(TEMPLATE_DIR))


async def _render_screen(
    request: Request,
    db: AsyncSession,
    user: User,
    hook_name: str,
    heading: str,
    screen: str,
    **context: Any,
) -> HTMLResponse:
    payload = {
        "user": user,
        "db": db,
        "request": request,
        "query": dict(request.query_params),
        **context,
    }
    boxes = await plugin_registry.fire_hook(hook_name, payload)
    return templates.TemplateResponse(
        request,
        "admin/edit.html",
        {
            "app_name": settings.app_name,
            "heading": heading,
            "screen": screen,
            "boxes": boxes,
        },
    )


@router.get("/posts/{post_id}/edit", response_class=HTMLResponse)
async def edit_post(
    request: Request,
    post_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(capability_required("edit_posts")),
):
    result = await db.execute(select(Content).where(Content.id == post_id))
    post = result.scalars().first()
    if post is None:
        raise ContentNotFoundError(post_id)

    return await _render_screen(
        request, db, current_user, HOOK_ADMIN_POST_META_BOXES, f"Edit Post: {post.title}", "post-edit", post=post
    )


@router.get("/terms/edit", response_class=HTMLResponse)
async def edit_term(
    request: Request,
    tag_id: int = Query(..., alias="tag_ID"),
    taxonomy: str = Query("category"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(capability_required("manage_categories")),
):
    result = await db.execute(select(Term).where(Term.id == tag_id, Term.taxonomy == taxonomy))
    term = result.scalars().first()
    if term is None:
        raise TermNotFoundError(tag_id)

    return await _render_screen(
        request,
        db,
        current_user,
        HOOK_ADMIN_TERM_EDIT_FORM,
        f"Edit Term: {term.name}",
        "term-edit",
        term=term,
        taxonomy=term.taxonomy,
    )


@router.get("/profile", response_class=HTMLResponse)
async def show_profile(
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return await _render_screen(
        request,
        db,
        current_user,
        HOOK_ADMIN_USER_SHOW_PROFILE,
        "Profile",
        "profile",
        is_profile_page=True,
        profile_user=current_user,
    )


@router.get("/users/edit", response_class=HTMLResponse)
async def edit_user(
    request: Request,
    user_id: int = Query(...),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(capability_required("edit_users")),
):
    result = await db.execute(select(User).where(User.id == user_id))
    profile_user = result.scalars().first()
    if profile_user is None:
        raise UserNotFoundError(user_id)

    return await _render_screen(
        request,
        db,
        current_user,
        HOOK_ADMIN_USER_EDIT_PROFILE,
        f"Edit User {profile_user.username}",
        "user-edit",
        is_profile_page=False,
        profile_user=profile_user,
    )
