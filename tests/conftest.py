import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker

# 1. Base and models
from app.db.base import Base
from app.models.image import Image
from app.models.thumbnail import Thumbnail

# 2. Dependency
from app.db.session import get_db, enable_sqlite_foreign_keys

# 3. Routers
from app.api.v1.api import router as api_router
from app.pages.api import router as pages_router
from app.core.task_manager import task_manager
from tests.helpers import encode_image

# In-memory SQLite
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(autouse=True)
def workdir(tmp_path, monkeypatch):
    """Run every test in a temp cwd so uploads/ lands inside tmp_path"""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture(autouse=True)
def clean_tasks():
    """Background task registry is process-wide"""
    task_manager.tasks.clear()
    yield
    task_manager.tasks.clear()


@pytest_asyncio.fixture(scope="function")
async def db_session():
    """Isolated database session per test."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False)
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with async_session() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
def app_overrides(db_session):
    """Replaces the get_db dependency."""
    async def override_get_db():
        yield db_session
    return override_get_db


@pytest_asyncio.fixture(scope="function")
async def client(app_overrides):
    """Test client with the JSON API under /api/v1 and the HTML pages at the root."""
    app = FastAPI()
    app.include_router(api_router, prefix="/api/v1")
    app.include_router(pages_router)

    app.dependency_overrides[get_db] = app_overrides

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def png_bytes():
    """600x300 PNG"""
    return encode_image(600, 300, ".png")


@pytest.fixture
def jpeg_bytes():
    """120x480 JPEG"""
    return encode_image(120, 480, ".jpg")


@pytest_asyncio.fixture(scope="function")
async def uploaded_image(db_session, png_bytes):
    """An image stored through the full upload pipeline."""
    from app.service.IO.upload_service import UploadService
    return await UploadService(db_session).upload(png_bytes, "cat.png", "image/png", tags="pets")
