"""Test fixtures — a fresh in-memory database per test.

Testing pattern for async SQLAlchemy + FastAPI:

1. Each test gets its own engine on an in-memory SQLite database
   (aiosqlite + StaticPool, so every connection sees the same memory DB).
2. The schema is created from Base.metadata before the test and the
   engine is disposed after it, so nothing leaks between tests.
3. get_db is overridden to hand each request its own session from the
   per-test session factory, just like production does.
"""

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from yogastudio.auth.password import hash_password
from yogastudio.auth.principal import Principal
from yogastudio.db.engine import get_db
from yogastudio.db.models import Base, Teacher, User
from yogastudio.main import app


TEST_DB_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture()
async def session_factory():
    """Per-test session factory bound to a fresh in-memory schema."""
    engine = create_async_engine(
        TEST_DB_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture()
async def db_session(session_factory):
    """Session for tests that drive services directly."""
    async with session_factory() as session:
        yield session


def _override_db(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    return override_get_db


@pytest_asyncio.fixture()
async def client(session_factory):
    """HTTP client with get_db and authorization overridden.

    get_current_principal is overridden to return user #1, so protected
    routes work without logging in first.
    """
    from yogastudio.auth.dependencies import get_current_principal

    def override_get_current_principal():
        return Principal(
            id=1,
            username="yoga@studio.com",
            first_name="John",
            last_name="Doe",
            password_hash="",
            is_admin=False,
        )

    app.dependency_overrides[get_db] = _override_db(session_factory)
    app.dependency_overrides[get_current_principal] = override_get_current_principal

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def unauthenticated_client(session_factory):
    """HTTP client WITHOUT auth override — the real gate and 401 path run."""
    app.dependency_overrides[get_db] = _override_db(session_factory)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ─── Data helpers ───────────────────────────────────────


async def make_user(
    session: AsyncSession,
    email: str = "yoga@studio.com",
    password: str = "test!1234",
    first_name: str = "John",
    last_name: str = "Doe",
    admin: bool = False,
) -> User:
    user = User(
        email=email,
        first_name=first_name,
        last_name=last_name,
        password_hash=hash_password(password, rounds=4),
        admin=admin,
    )
    session.add(user)
    await session.commit()
    return user


async def make_teacher(
    session: AsyncSession, first_name: str = "Margot", last_name: str = "DELAHAYE"
) -> Teacher:
    teacher = Teacher(first_name=first_name, last_name=last_name)
    session.add(teacher)
    await session.commit()
    return teacher


@pytest_asyncio.fixture()
async def user(db_session):
    """User #1, the identity the `client` fixture acts as."""
    return await make_user(db_session)


@pytest_asyncio.fixture()
async def teacher(db_session):
    return await make_teacher(db_session)
