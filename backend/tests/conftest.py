import os

# Configuração de teste antes de importar a aplicação
os.environ["SECRET_KEY"] = "ludoteca-test-secret-key-with-at-least-32-bytes"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["CACHE_BACKEND"] = "memory"
os.environ["AUTO_CREATE_TABLES"] = "false"

from datetime import date

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from ludoteca.core.cache import MemoryCacheProvider, TagAwareCache
from ludoteca.core.database import Base, create_engine_from_url, get_db
from ludoteca.core.deps import get_cache
from ludoteca.core.security import ROLE_ADMIN, ROLE_USER, create_access_token, get_password_hash
from ludoteca.main import create_application
from ludoteca.models import Category, Editor, User, VideoGame

ADMIN_EMAIL = "admin@ludoteca.com"
ADMIN_PASSWORD = "admin123"
USER_EMAIL = "jogador@ludoteca.com"
USER_PASSWORD = "jogador123"


@pytest_asyncio.fixture
async def engine():
    test_engine = create_engine_from_url("sqlite+aiosqlite://", poolclass=StaticPool)
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def cache():
    return TagAwareCache(MemoryCacheProvider())


@pytest.fixture
def app(session_factory, cache):
    application = create_application()

    async def override_get_db():
        async with session_factory() as session:
            yield session

    application.dependency_overrides[get_db] = override_get_db
    application.dependency_overrides[get_cache] = lambda: cache
    yield application
    application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def create_record(session_factory):
    """Persiste registros numa sessão própria, fora das requisições."""
    async def _create(*records):
        async with session_factory() as session:
            session.add_all(records)
            await session.commit()
        return records[0] if len(records) == 1 else records
    return _create


@pytest.fixture
def fetch(session_factory):
    """Relê um registro do banco numa sessão nova."""
    async def _fetch(model, id):
        async with session_factory() as session:
            return await session.get(model, id)
    return _fetch


@pytest.fixture
def count(session_factory):
    async def _count(model):
        async with session_factory() as session:
            result = await session.execute(select(func.count()).select_from(model))
            return result.scalar_one()
    return _count


def token_for(user: User) -> str:
    return create_access_token({
        "sub": str(user.id),
        "username": user.email,
        "roles": user.get_roles(),
    })


@pytest_asyncio.fixture
async def admin_user(create_record):
    return await create_record(User(
        email=ADMIN_EMAIL,
        password=get_password_hash(ADMIN_PASSWORD),
        roles=[ROLE_ADMIN],
    ))


@pytest_asyncio.fixture
async def regular_user(create_record):
    return await create_record(User(
        email=USER_EMAIL,
        password=get_password_hash(USER_PASSWORD),
        roles=[ROLE_USER],
    ))


@pytest.fixture
def admin_headers(admin_user):
    return {"Authorization": f"Bearer {token_for(admin_user)}"}


@pytest.fixture
def user_headers(regular_user):
    return {"Authorization": f"Bearer {token_for(regular_user)}"}


@pytest_asyncio.fixture
async def category(create_record):
    return await create_record(Category(name="Aventura"))


@pytest_asyncio.fixture
async def editor(create_record):
    return await create_record(Editor(name="Nintendo", country="Japão"))


@pytest_asyncio.fixture
async def video_game(create_record, category, editor):
    return await create_record(VideoGame(
        title="The Legend of Zelda",
        release_date=date(1986, 2, 21),
        description="Exploração e masmorras",
        category_id=category.id,
        editor_id=editor.id,
    ))
