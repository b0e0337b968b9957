import pytest
from unittest.mock import patch, MagicMock, AsyncMock
from fastapi import FastAPI
from sqlalchemy import select

import main
from app.core.config import settings
from app.models.thumbnail import Thumbnail
from app.service.IO.file_services import FileService


@pytest.fixture
def startup(db_session):
    """Runs the lifespan against the test session without touching the real engine or pool"""
    mock_session_cm = MagicMock()

    async def fake_aenter(*args):
        return db_session

    async def fake_aexit(*args):
        pass

    mock_session_cm.__aenter__ = fake_aenter
    mock_session_cm.__aexit__ = fake_aexit

    with patch("main.AsyncSessionLocal", return_value=mock_session_cm), \
            patch("main.init_db", new_callable=AsyncMock) as init_db, \
            patch("main.shutdown_executor") as shutdown_executor, \
            patch("main.engine") as engine:
        engine.dispose = AsyncMock()
        yield {"init_db": init_db, "shutdown_executor": shutdown_executor, "engine": engine}


async def _existing_thumbnail_files(db_session, image_id):
    rows = (await db_session.execute(
        select(Thumbnail).where(Thumbnail.image_id == image_id)
    )).scalars().all()
    return [t for t in rows if FileService.get_thumbnail_path(t.filename).exists()]


@pytest.mark.asyncio
async def test_startup_backfills_missing_thumbnails(startup, db_session, uploaded_image, monkeypatch):
    monkeypatch.setattr(settings, "FILL_MISSING_THUMBNAILS_ON_STARTUP", True)
    image_id = uploaded_image.id
    FileService.get_thumbnail_path(uploaded_image.thumbnails[0].filename).unlink()

    async with main.lifespan(FastAPI()):
        startup["init_db"].assert_awaited_once()
        assert FileService.get_thumbnails_directory().is_dir()
        assert len(await _existing_thumbnail_files(db_session, image_id)) == len(settings.THUMBNAIL_SIZES)

    startup["shutdown_executor"].assert_called_once()
    startup["engine"].dispose.assert_awaited_once()

@pytest.mark.asyncio
async def test_startup_backfill_can_be_disabled(startup, db_session, uploaded_image, monkeypatch):
    monkeypatch.setattr(settings, "FILL_MISSING_THUMBNAILS_ON_STARTUP", False)
    image_id = uploaded_image.id
    FileService.get_thumbnail_path(uploaded_image.thumbnails[0].filename).unlink()

    with patch("main.BackfillService") as backfill:
        async with main.lifespan(FastAPI()):
            pass

    backfill.assert_not_called()
    assert len(await _existing_thumbnail_files(db_session, image_id)) == len(settings.THUMBNAIL_SIZES) - 1
