from sqlalchemy import Text, cast, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from app.models.meta import ContentMeta, TermMeta, UserMeta
from app.schemas.meta import EntityType
from app.services.meta_values import same_value
from typing import Any
import logging

logger = logging.getLogger(__name__)

# One meta table per entity type; all share the same columns
META_MODELS = {
    EntityType.POST: ContentMeta,
    EntityType.TERM: TermMeta,
    EntityType.USER: UserMeta,
}


def _meta_model(entity_type: EntityType | str):
    return META_MODELS[EntityType(entity_type)]


async def get_meta(db: AsyncSession, entity_type: EntityType | str, object_id: int) -> dict[str, list[Any]]:
    """
    Fetch every meta key and all of its values for one object.

    Args:
        db (AsyncSession): The database session.
        entity_type: "post", "term" or "user".
        object_id (int): Id of the post, term or user.

    Returns:
        dict: key -> list of values, in storage order. Empty if the object
        has no meta data.
    """
    model = _meta_model(entity_type)
    result = await db.execute(
        select(model.meta_key, model.meta_value).where(model.object_id == object_id).order_by(model.id)
    )

    meta: dict[str, list[Any]] = {}
    for key, value in result.all():
        meta.setdefault(key, []).append(value)
    return meta


async def add_meta(db: AsyncSession, entity_type: EntityType | str, object_id: int, key: str, value: Any) -> int:
    """Store one more value under ``key`` and return the new row id."""
    model = _meta_model(entity_type)
    row = model(object_id=object_id, meta_key=key, meta_value=value)
    db.add(row)
    await db.commit()
    await db.refresh(row)
    logger.debug(f"Added {EntityType(entity_type).value} meta '{key}' to object {object_id}")
    return row.id


async def update_meta(
    db: AsyncSession,
    entity_type: EntityType | str,
    object_id: int,
    key: str,
    new_value: Any,
    prev_value: Any,
) -> bool:
    """
    Conditionally replace a meta value.

    Only rows of ``key`` whose stored value equals ``prev_value`` are
    rewritten. Returns False when no row matches (the value changed since it
    was displayed) or when the new value is identical to the stored one.

    Each row is written with a compare-and-set on the stored JSON text that
    was read, inside one transaction. If another writer changed any of the
    rows in between, nothing is written and False is returned.
    """
    model = _meta_model(entity_type)
    stored_text = cast(model.meta_value, Text)
    result = await db.execute(
        select(model.id, model.meta_value, stored_text)
        .where(model.object_id == object_id, model.meta_key == key)
        .order_by(model.id)
    )
    matches = [(row_id, text) for row_id, value, text in result.all() if same_value(value, prev_value)]

    if not matches:
        logger.info(f"No {EntityType(entity_type).value} meta '{key}' on object {object_id} matches the previous value")
        return False

    if same_value(new_value, prev_value):
        return False

    try:
        for row_id, text in matches:
            updated = await db.execute(
                update(model)
                .where(model.id == row_id, stored_text == text)
                .values(meta_value=new_value)
                .execution_options(synchronize_session=False)
            )
            if updated.rowcount != 1:
                await db.rollback()
                logger.info(f"Meta '{key}' on object {object_id} changed during the update")
                return False
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Error updating meta '{key}' on object {object_id}: {str(e)}")
        return False

    logger.info(f"Updated {EntityType(entity_type).value} meta '{key}' on object {object_id} ({len(matches)} row(s))")
    return True
