"""
Laundry API Backend: Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets its own SQLite file under tmp_path with the full
       schema. API tests reach it through an override of get_db_session,
       so the app's module-level engine is never used.

Fixture Hierarchy (all function-scoped):
    db_engine
    └── session_factory
        ├── db_session:    one open session for repository tests
        ├── seeded_owner:  owner account (id 1) from OWNER_* settings
        │   └── staff:     an admin (id 2) and a user (id 3)
        └── test_client:   HTTPX AsyncClient bound to the app
"""

import os
import tempfile

# Override settings for testing BEFORE any laundryapi imports
os.environ["DATABASE_PATH"] = os.path.join(tempfile.mkdtemp(prefix="laundryapi_test_"), "unused.db")
os.environ["JWT_SECRET"] = "test-secret-not-for-production"
os.environ["PASSWORD_HASH_ROUNDS"] = "4"  # bcrypt minimum keeps the suite fast
os.environ["OWNER_PASSWORD"] = "owner-password"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import AsyncGenerator, Dict  # noqa: E402
from unittest.mock import AsyncMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker  # noqa: E402

from laundryapi.database import build_engine, create_schema, get_db_session  # noqa: E402
from laundryapi.models.user import Role  # noqa: E402
from laundryapi.repositories import users as users_repo  # noqa: E402
from laundryapi.security.credentials import TokenClaims, hash_password, issue_token  # noqa: E402
from laundryapi.services.user_service import user_service  # noqa: E402

API = "/api/v1"

OWNER_ID = 1
ADMIN_ID = 2
USER_ID = 3
STAFF_PASSWORD = "staff-password"


def bearer(user_id: int, role: Role) -> Dict[str, str]:
    """Authorization header carrying a freshly issued token."""
    token = issue_token(TokenClaims(id=user_id, role=role))
    return {"Authorization": f"Bearer {token}"}


# ══════════════════════════════════════════════════════════════════════════
# Store Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """A fresh SQLite file with every table created."""
    engine = build_engine(f"sqlite+aiosqlite:///{(tmp_path / 'laundry.db').as_posix()}")
    await create_schema(bind=engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def mock_db_session():
    """
    A stand-in AsyncSession for service tests that patch the repositories.

    Usage:
        with patch("laundryapi.services.product_service.products_repo") as repo:
            repo.list_products = AsyncMock(side_effect=...)
            await product_service.list_products(mock_db_session)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    return session


@pytest_asyncio.fixture
async def seeded_owner(session_factory) -> None:
    async with session_factory() as session:
        async with session.begin():
            await user_service.ensure_owner(session)


@pytest_asyncio.fixture
async def staff(session_factory, seeded_owner) -> None:
    """Adds 'admin1' (id 2, admin) and 'user1' (id 3, user)."""
    password_hash = hash_password(STAFF_PASSWORD)
    async with session_factory() as session:
        async with session.begin():
            await users_repo.create_user(
                session, "Admin One", "admin1", "admin1@example.com", password_hash, Role.ADMIN.value
            )
            await users_repo.create_user(
                session, "User One", "user1", "user1@example.com", password_hash, Role.USER.value
            )


# ══════════════════════════════════════════════════════════════════════════
# HTTP Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(session_factory, staff) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTPX AsyncClient routed straight into the FastAPI app.

    The app's session dependency is swapped for one bound to this test's
    engine; commit/rollback behaviour matches the real dependency.
    """
    from laundryapi.main import app

    async def override_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def owner_headers() -> Dict[str, str]:
    return bearer(OWNER_ID, Role.OWNER)


@pytest.fixture
def admin_headers() -> Dict[str, str]:
    return bearer(ADMIN_ID, Role.ADMIN)


@pytest.fixture
def user_headers() -> Dict[str, str]:
    return bearer(USER_ID, Role.USER)
