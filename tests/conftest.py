"""
Test configuration and fixtures for the submission portal test suite.
"""

import os
import tempfile

# must be set before anything under app/ is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("UPLOADS_DIR", tempfile.mkdtemp(prefix="portal-uploads-"))

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.auth.password_security import hash_password
from app.database import Base, get_db
from app.helpers.file_paths import LocalBlobStore, get_blob_store
from app.main import app
from app.models import User

ADMIN_EMAIL = "admin@school.org"
ADMIN_PASSWORD = "correct horse battery"


@pytest.fixture
async def engine():
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def blob_store(tmp_path):
    return LocalBlobStore(str(tmp_path / "uploads"))


@pytest.fixture
async def client(session_factory, blob_store):
    """HTTP client wired to the test database and upload folder."""
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_blob_store] = lambda: blob_store

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
async def admin_user(session_factory):
    async with session_factory() as session:
        user = User(email=ADMIN_EMAIL, name="Head Teacher", password_hash=hash_password(ADMIN_PASSWORD))
        session.add(user)
        await session.commit()
        await session.refresh(user)
        return user


@pytest.fixture
async def admin_headers(client, admin_user):
    response = await client.post("/admin/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def upload_form(name="Asha", class_name="10th", section="A"):
    return {"name": name, "class": class_name, "section": section}


def python_file(filename="hw1.py", content=b"print('hello')\n"):
    return {"file": (filename, content, "text/x-python")}
