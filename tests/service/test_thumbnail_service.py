import pytest
from sqlalchemy import select, func

from app.core.exceptions import ResourceNotFoundError
from app.models.thumbnail import Thumbnail
from app.service.IO.file_services import FileService
from app.service.IO.image_service import ImageService
from app.service.IO.thumbnail_service import ThumbnailService


@pytest.mark.asyncio
async def test_thumbnails_sorted_by_bound(db_session, uploaded_image):
    svc = ThumbnailService(db_session)

    thumbnails = await svc.get_thumbnails_for_image(uploaded_image.id)
    assert [(t.max_width, t.max_height) for t in thumbnails] == [(100, 100), (300, 300)]
    assert [(t.width, t.height) for t in thumbnails] == [(100, 50), (300, 150)]

    primary = await svc.get_primary_thumbnail(uploaded_image.id)
    assert primary.id == thumbnails[0].id

@pytest.mark.asyncio
async def test_primary_thumbnail_missing(db_session):
    img = await ImageService(db_session).create_image("x.png", "x.png", "image/png", 10)
    await db_session.commit()

    with pytest.raises(ResourceNotFoundError):
        await ThumbnailService(db_session).get_primary_thumbnail(img.id)

@pytest.mark.asyncio
async def test_get_thumbnail_or_404(db_session):
    with pytest.raises(ResourceNotFoundError):
        await ThumbnailService(db_session).get_thumbnail_or_404(999)

@pytest.mark.asyncio
async def test_add_thumbnail_record(db_session):
    img = await ImageService(db_session).create_image("y.png", "y.png", "image/png", 10)
    svc = ThumbnailService(db_session)

    thumbnail = svc.add_thumbnail(
        img, max_width=64, max_height=64, width=64, height=32,
        filename="y_64x64.jpg", content_type="image/jpeg", byte_size=5,
    )
    await db_session.commit()

    assert thumbnail.id is not None
    assert thumbnail.image_id == img.id
    fetched = await svc.get_thumbnail_or_404(thumbnail.id)
    assert fetched.filename == "y_64x64.jpg"

@pytest.mark.asyncio
async def test_delete_thumbnail_removes_row_and_file(db_session, uploaded_image):
    svc = ThumbnailService(db_session)
    thumbnail = uploaded_image.thumbnails[0]
    path = FileService.get_thumbnail_path(thumbnail.filename)
    assert path.exists()

    removed = await svc.delete_thumbnail(uploaded_image, thumbnail, commit=True)

    assert removed is True
    assert not path.exists()
    count = (await db_session.execute(
        select(func.count(Thumbnail.id)).where(Thumbnail.image_id == uploaded_image.id)
    )).scalar()
    assert count == 1
