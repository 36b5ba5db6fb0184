import os

# src.config.database는 import 시점에 PG_DATABASE_URL을 요구
os.environ.setdefault("PG_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test_secret_key")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from src.app.common.utils.consts import PetSize, PetStatus, PetType
from src.app.common.utils.dependency import get_session
from src.app.common.utils.security import create_access_token
from src.app.v1.pet.entity.pet import Pet
from src.app.v1.post.entity.post import Post
from src.app.v1.user.entity.user import User
from src.config.database import Base, database_models  # noqa: F401
from src.main import app

POST_ID = 42
PET_ID = 7


def auth_headers(user_id: int) -> dict:
    token = create_access_token({"sub": user_id})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers_for():
    return auth_headers


@pytest_asyncio.fixture
async def test_engine(tmp_path):
    # 테스트마다 새 SQLite 파일 DB
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(test_engine):
    return async_sessionmaker(bind=test_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def seed_data(session_factory):
    """사용자 1~5, 게시글 42 (user 1), 반려동물 7 (user 2)"""
    async with session_factory() as session:
        for user_id in range(1, 6):
            session.add(
                User(
                    id=user_id,
                    username=f"user{user_id}",
                    email=f"user{user_id}@example.com",
                    name=f"User {user_id}",
                    profile_image=f"http://example.com/{user_id}.png",
                )
            )
        await session.flush()

        session.add(Post(id=POST_ID, user_id=1, content="Meu cachorro no parque"))
        session.add(
            Pet(
                id=PET_ID,
                owner_id=2,
                name="Rex",
                pet_type=PetType.DOG,
                pet_status=PetStatus.ADOPTION,
                size=PetSize.MEDIUM,
            )
        )
        await session.commit()


@pytest_asyncio.fixture
async def client(session_factory, seed_data):
    async def override_get_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as async_client:
        yield async_client

    app.dependency_overrides.clear()
