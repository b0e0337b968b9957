from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.exceptions import ResourceNotFoundError, StorageError
from app.schemas.image import ResultResponse
from app.service.IO.image_service import ImageService
from app.db.session import get_db
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.delete("/{image_id}", response_model=ResultResponse)
async def remove_image(
    image_id: int,
    db: AsyncSession = Depends(get_db)
):
    """Delete an image together with its thumbnails and files"""
    image_service = ImageService(db)

    try:
        removed = await image_service.remove_image(image_id)
        return ResultResponse(
            success=True,
            message=f"Image {image_id} deleted successfully",
            data=removed
        )

    except ResourceNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except Exception as e:
        logger.error(f"Unexpected error in remove_image endpoint: {str(e)}")
        raise HTTPException(status_code=500, detail="Unexpected error occurred")
