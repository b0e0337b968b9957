from typing import Optional
from fastapi import APIRouter, HTTPException, Depends, Query
from fastapi.responses import FileResponse
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.exceptions import ResourceNotFoundError, StorageError
from app.service.IO.file_services import FileService
from app.service.IO.image_service import ImageService
from app.service.IO.thumbnail_service import ThumbnailService
from app.db.session import get_db
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("/{image_id}/file")
async def download_image(
    image_id: int,
    db: AsyncSession = Depends(get_db)
):
    """Original image bytes"""
    image_service = ImageService(db)

    try:
        image = await image_service.get_image_or_404(image_id)

        file_path = FileService.get_image_path(image.filename)
        if not FileService.file_exists(file_path):
            logger.error(f"File not found: {file_path}")
            raise ResourceNotFoundError("Image file not found on server")

        logger.info(f"Serving image {image_id}: {file_path}")
        return FileResponse(
            path=str(file_path),
            filename=image.original_filename,
            media_type=image.content_type,
            content_disposition_type="inline"
        )

    except ResourceNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except Exception as e:
        logger.error(f"Error downloading image {image_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Error downloading image")

@router.get("/{image_id}/thumbnail")
async def download_image_thumbnail(
    image_id: int,
    max_width: Optional[int] = Query(None, gt=0),
    max_height: Optional[int] = Query(None, gt=0),
    db: AsyncSession = Depends(get_db)
):
    """Thumbnail of an image: the smallest one, or the one matching the given bound"""
    image_service = ImageService(db)
    thumbnail_service = ThumbnailService(db)

    try:
        await image_service.get_image_or_404(image_id)

        if max_width is None and max_height is None:
            thumbnail = await thumbnail_service.get_primary_thumbnail(image_id)
        else:
            candidates = [
                t for t in await thumbnail_service.get_thumbnails_for_image(image_id)
                if (max_width is None or t.max_width == max_width)
                and (max_height is None or t.max_height == max_height)
            ]
            if not candidates:
                raise ResourceNotFoundError(
                    f"Image {image_id} has no {max_width or '*'}x{max_height or '*'} thumbnail"
                )
            thumbnail = candidates[0]

        return thumbnail_file_response(thumbnail_service, thumbnail)

    except ResourceNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except Exception as e:
        logger.error(f"Error downloading thumbnail of image {image_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Error downloading thumbnail")

def thumbnail_file_response(thumbnail_service: ThumbnailService, thumbnail) -> FileResponse:
    file_path = thumbnail_service.get_thumbnail_file_path(thumbnail)
    if not FileService.file_exists(file_path):
        logger.error(f"Thumbnail file not found: {file_path}")
        raise ResourceNotFoundError("Thumbnail file not found on server")

    return FileResponse(
        path=str(file_path),
        filename=thumbnail.filename,
        media_type=thumbnail.content_type,
        content_disposition_type="inline"
    )
