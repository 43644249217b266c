"""
Pytest configuration and fixtures for Meta Inspector tests
"""

import os
import sys
from collections.abc import AsyncGenerator
from datetime import timedelta

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "meta-inspector-test-secret-key-0123456789")
os.environ.setdefault("LOG_JSON", "false")

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))  # noqa: PTH100, PTH118, PTH119, PTH120

from app.auth import create_access_token  # noqa: E402
from app.constants import RoleName  # noqa: E402
from app.database import Base, get_db  # noqa: E402
from app.models import Content, Role, Term, User  # noqa: E402
from app.plugins.meta_inspector_plugin import MetaInspectorPlugin  # noqa: E402
from app.plugins.registry import plugin_registry  # noqa: E402

ROLES = [role.value for role in RoleName]


@pytest.fixture(scope="function")
async def session_factory() -> AsyncGenerator[async_sessionmaker, None]:
    """
    Fresh in-memory database with the default roles for each test.

    StaticPool keeps a single connection so every session sees the same tables.
    """
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        for name in ROLES:
            session.add(Role(name=name, permissions=[]))
        await session.commit()

    yield factory

    await engine.dispose()


@pytest.fixture(scope="function")
async def test_db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


async def _create_user(db: AsyncSession, role_name: str, username: str) -> User:
    from sqlalchemy.future import select

    result = await db.execute(select(Role).where(Role.name == role_name))
    role = result.scalars().first()

    user = User(
        username=username,
        email=f"{username}@example.com",
        hashed_password="not-a-real-hash",
        role_id=role.id,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user, ["role"])
    return user


@pytest.fixture
async def test_admin(test_db: AsyncSession) -> User:
    return await _create_user(test_db, "admin", "testadmin")


@pytest.fixture
async def test_editor(test_db: AsyncSession) -> User:
    """Can edit posts but lacks manage_options."""
    return await _create_user(test_db, "editor", "testeditor")


@pytest.fixture
async def test_user(test_db: AsyncSession) -> User:
    return await _create_user(test_db, "user", "testuser")


@pytest.fixture
async def test_post(test_db: AsyncSession, test_admin: User) -> Content:
    post = Content(title="Hello World", body="First post", slug="hello-world", author_id=test_admin.id)
    test_db.add(post)
    await test_db.commit()
    await test_db.refresh(post)
    return post


@pytest.fixture
async def test_term(test_db: AsyncSession) -> Term:
    term = Term(taxonomy="category", name="News", slug="news")
    test_db.add(term)
    await test_db.commit()
    await test_db.refresh(term)
    return term


def _auth_headers(user: User) -> dict:
    token = create_access_token(data={"sub": user.email}, expires_delta=timedelta(minutes=30))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_auth_headers(test_admin: User) -> dict:
    return _auth_headers(test_admin)


@pytest.fixture
def editor_auth_headers(test_editor: User) -> dict:
    return _auth_headers(test_editor)


@pytest.fixture
def user_auth_headers(test_user: User) -> dict:
    return _auth_headers(test_user)


@pytest.fixture
def meta_inspector_plugin():
    """Register the meta inspector for the duration of a test."""
    plugin = MetaInspectorPlugin()
    plugin_registry.register(plugin)
    yield plugin
    plugin_registry.unregister(plugin.meta.name)


@pytest.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for the application, bound to the test database."""
    from main import app

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as test_client:
        yield test_client
    app.dependency_overrides.clear()
