"""
Tests for reading and conditionally updating meta data.
"""

import asyncio

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.database import Base
from app.models.meta import ContentMeta
from app.schemas.meta import EntityType
from app.services.meta_service import add_meta, get_meta, update_meta


class TestGetMeta:
    async def test_no_meta_returns_empty_mapping(self, test_db, test_post):
        assert await get_meta(test_db, EntityType.POST, test_post.id) == {}

    async def test_values_grouped_by_key_in_storage_order(self, test_db, test_post):
        await add_meta(test_db, "post", test_post.id, "color", "blue")
        await add_meta(test_db, "post", test_post.id, "size", {"w": 10, "h": 20})
        await add_meta(test_db, "post", test_post.id, "color", "green")

        meta = await get_meta(test_db, "post", test_post.id)

        assert meta == {"color": ["blue", "green"], "size": [{"w": 10, "h": 20}]}
        assert list(meta) == ["color", "size"]

    async def test_entity_types_are_separate(self, test_db, test_post, test_term, test_admin):
        await add_meta(test_db, "post", test_post.id, "origin", "post")
        await add_meta(test_db, "term", test_term.id, "origin", "term")
        await add_meta(test_db, "user", test_admin.id, "origin", "user")

        assert await get_meta(test_db, "post", test_post.id) == {"origin": ["post"]}
        assert await get_meta(test_db, "term", test_term.id) == {"origin": ["term"]}
        assert await get_meta(test_db, "user", test_admin.id) == {"origin": ["user"]}

    async def test_other_objects_are_not_included(self, test_db, test_admin, test_editor):
        await add_meta(test_db, "user", test_admin.id, "nickname", "boss")
        await add_meta(test_db, "user", test_editor.id, "nickname", "ed")

        assert await get_meta(test_db, "user", test_editor.id) == {"nickname": ["ed"]}


class TestUpdateMeta:
    async def test_matching_previous_value_updates(self, test_db, test_post):
        await add_meta(test_db, "post", test_post.id, "color", "blue")

        assert await update_meta(test_db, "post", test_post.id, "color", "red", "blue") is True
        assert await get_meta(test_db, "post", test_post.id) == {"color": ["red"]}

    async def test_stale_previous_value_fails(self, test_db, test_post):
        await add_meta(test_db, "post", test_post.id, "color", "green")

        assert await update_meta(test_db, "post", test_post.id, "color", "red", "blue") is False
        assert await get_meta(test_db, "post", test_post.id) == {"color": ["green"]}

    async def test_unchanged_value_reports_failure(self, test_db, test_post):
        await add_meta(test_db, "post", test_post.id, "color", "blue")

        assert await update_meta(test_db, "post", test_post.id, "color", "blue", "blue") is False

    async def test_missing_key_fails(self, test_db, test_post):
        assert await update_meta(test_db, "post", test_post.id, "color", "red", "blue") is False
        assert await get_meta(test_db, "post", test_post.id) == {}

    async def test_only_the_matching_value_of_a_multi_value_key_changes(self, test_db, test_term):
        await add_meta(test_db, "term", test_term.id, "alias", "one")
        await add_meta(test_db, "term", test_term.id, "alias", "two")

        assert await update_meta(test_db, "term", test_term.id, "alias", "deux", "two") is True
        assert await get_meta(test_db, "term", test_term.id) == {"alias": ["one", "deux"]}

    async def test_structured_previous_value_matches(self, test_db, test_admin):
        await add_meta(test_db, "user", test_admin.id, "prefs", {"theme": "dark", "tabs": [1, 2]})

        updated = await update_meta(
            test_db, "user", test_admin.id, "prefs", {"theme": "light", "tabs": [1, 2]}, {"theme": "dark", "tabs": [1, 2]}
        )

        assert updated is True
        assert await get_meta(test_db, "user", test_admin.id) == {"prefs": [{"theme": "light", "tabs": [1, 2]}]}

    async def test_string_does_not_match_structured_value(self, test_db, test_admin):
        await add_meta(test_db, "user", test_admin.id, "count", 5)

        assert await update_meta(test_db, "user", test_admin.id, "count", "6", "5") is False

    async def test_boolean_replaces_equal_integer(self, test_db, test_post):
        await add_meta(test_db, "post", test_post.id, "flag", 1)

        assert await update_meta(test_db, "post", test_post.id, "flag", True, 1) is True
        assert await get_meta(test_db, "post", test_post.id) == {"flag": [True]}

    async def test_false_does_not_match_stored_zero(self, test_db, test_post):
        await add_meta(test_db, "post", test_post.id, "count", 0)

        assert await update_meta(test_db, "post", test_post.id, "count", 1, False) is False
        assert await get_meta(test_db, "post", test_post.id) == {"count": [0]}


class _InterleavedSession:
    """Runs ``between`` after the first statement of the wrapped session."""

    def __init__(self, session, between):
        self._session = session
        self._between = between
        self._statements = 0

    async def execute(self, *args, **kwargs):
        result = await self._session.execute(*args, **kwargs)
        self._statements += 1
        if self._statements == 1:
            await self._between()
        return result

    def __getattr__(self, name):
        return getattr(self._session, name)


class TestConcurrentUpdates:
    async def test_value_changed_after_read_is_not_overwritten(self, session_factory, test_db, test_post):
        await add_meta(test_db, "post", test_post.id, "color", "blue")

        async def other_writer():
            async with session_factory() as other:
                assert await update_meta(other, "post", test_post.id, "color", "green", "blue") is True

        session = _InterleavedSession(test_db, other_writer)
        assert await update_meta(session, "post", test_post.id, "color", "red", "blue") is False

        async with session_factory() as fresh:
            assert await get_meta(fresh, "post", test_post.id) == {"color": ["green"]}

    async def test_overlapping_saves_from_the_same_value(self, tmp_path):
        engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'meta.db'}")
        try:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
            async with factory() as session:
                session.add(ContentMeta(object_id=1, meta_key="color", meta_value="blue"))
                await session.commit()

            async def save(value):
                async with factory() as session:
                    return await update_meta(session, "post", 1, "color", value, "blue")

            results = await asyncio.gather(save("red"), save("green"))

            assert sorted(results) == [False, True]
            winner = "red" if results[0] else "green"
            async with factory() as session:
                assert await get_meta(session, "post", 1) == {"color": [winner]}
        finally:
            await engine.dispose()
