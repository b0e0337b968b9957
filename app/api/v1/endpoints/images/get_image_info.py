from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.exceptions import ResourceNotFoundError, StorageError
from app.service.IO.image_service import ImageService
from app.db.session import get_db
from app.schemas.image import ImageResponse
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("/{image_id}", response_model=ImageResponse)
async def get_image_info(
    image_id: int,
    db: AsyncSession = Depends(get_db)
):
    """Image record with its thumbnails"""
    image_service = ImageService(db)

    try:
        return await image_service.get_image_or_404(image_id)
    except ResourceNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except Exception as e:
        logger.error(f"Error getting image info {image_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Error getting image info")
