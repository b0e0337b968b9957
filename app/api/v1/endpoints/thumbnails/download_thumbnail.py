from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.exceptions import ResourceNotFoundError, StorageError
from app.service.IO.thumbnail_service import ThumbnailService
from app.api.v1.endpoints.images.download_image import thumbnail_file_response
from app.db.session import get_db
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("/{thumbnail_id}")
async def download_thumbnail(
    thumbnail_id: int,
    db: AsyncSession = Depends(get_db)
):
    """Thumbnail bytes by thumbnail ID"""
    thumbnail_service = ThumbnailService(db)

    try:
        thumbnail = await thumbnail_service.get_thumbnail_or_404(thumbnail_id)
        logger.info(f"Serving thumbnail {thumbnail_id}: {thumbnail.filename}")
        return thumbnail_file_response(thumbnail_service, thumbnail)

    except ResourceNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except Exception as e:
        logger.error(f"Error downloading thumbnail {thumbnail_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Error downloading thumbnail")
