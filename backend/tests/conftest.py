import os

# 必须在导入应用之前设置，避免测试写入本地数据库文件
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from typing import AsyncGenerator, Callable, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from bookmarks_api.database import Base, get_db
from bookmarks_api.main import app
from bookmarks_api.models import Bookmark, now_ms

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def client(session_factory: async_sessionmaker) -> AsyncGenerator[AsyncClient, None]:
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def make_bookmark(session_factory: async_sessionmaker) -> Callable:
    """直接写库创建书签，返回 guid"""

    async def _make(
        link: str = "https://example.com",
        description: Optional[str] = "",
        favorites: bool = False,
        created_at: Optional[int] = None,
    ) -> str:
        async with session_factory() as session:
            bookmark = Bookmark(
                link=link,
                description=description,
                favorites=favorites,
                created_at=created_at if created_at is not None else now_ms(),
            )
            session.add(bookmark)
            await session.commit()
            return bookmark.guid

    return _make


@pytest.fixture
def load_bookmark(session_factory: async_sessionmaker) -> Callable:
    """从新会话读取书签"""

    async def _load(guid: str) -> Optional[Bookmark]:
        async with session_factory() as session:
            return await session.get(Bookmark, guid)

    return _load
