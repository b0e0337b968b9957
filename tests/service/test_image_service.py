import pytest
from sqlalchemy import select, func

from app.core.exceptions import ResourceNotFoundError
from app.models.image import Image
from app.models.thumbnail import Thumbnail
from app.service.IO.file_services import FileService
from app.service.IO.image_service import ImageService


@pytest.mark.asyncio
async def test_create_get_delete_image_flow(db_session):
    svc = ImageService(db_session)

    img = await svc.create_image("file.jpg", "orig.jpg", "image/jpeg", 123, tags="a b")
    await db_session.commit()
    assert img.id is not None
    assert img.filename == "file.jpg"
    assert img.original_filename == "orig.jpg"
    assert img.created_at is not None
    assert img.thumbnails == []

    fetched = await svc.get_image_by_id(img.id)
    assert fetched is not None
    assert fetched.tags == "a b"

    assert await svc.count_images() == 1
    assert [i.id for i in await svc.get_all_images()] == [img.id]

    deleted = await svc.delete_image(img.id)
    assert deleted.id == img.id
    assert await svc.get_image_by_id(img.id) is None
    assert await svc.count_images() == 0

@pytest.mark.asyncio
async def test_missing_image(db_session):
    svc = ImageService(db_session)
    assert await svc.get_image_by_id(999) is None
    with pytest.raises(ResourceNotFoundError):
        await svc.get_image_or_404(999)
    with pytest.raises(ResourceNotFoundError):
        await svc.remove_image(999)

@pytest.mark.asyncio
async def test_remove_image_cascades_to_thumbnails(db_session, uploaded_image):
    image_id = uploaded_image.id
    original_path = FileService.get_image_path(uploaded_image.filename)
    thumbnail_paths = [FileService.get_thumbnail_path(t.filename) for t in uploaded_image.thumbnails]
    assert original_path.exists()
    assert thumbnail_paths and all(p.exists() for p in thumbnail_paths)

    removed = await ImageService(db_session).remove_image(image_id)
    assert removed["thumbnails_deleted"] == len(thumbnail_paths)
    assert removed["files_deleted"] == len(thumbnail_paths) + 1

    count = (await db_session.execute(
        select(func.count(Thumbnail.id)).where(Thumbnail.image_id == image_id)
    )).scalar()
    assert count == 0
    assert not original_path.exists()
    assert not any(p.exists() for p in thumbnail_paths)

@pytest.mark.asyncio
async def test_database_cascade_removes_orphans(db_session, uploaded_image):
    """ON DELETE CASCADE also applies to deletes issued outside the ORM"""
    from sqlalchemy import delete
    await db_session.execute(delete(Image).where(Image.id == uploaded_image.id))
    await db_session.commit()

    count = (await db_session.execute(select(func.count(Thumbnail.id)))).scalar()
    assert count == 0
