from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.exceptions import StorageError
from app.schemas.image import ResponseImagesList, ImageCountResponse
from app.service.IO.image_service import ImageService
from app.service.IO.listing_service import ListingService
from app.db.session import get_db
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("", response_model=ResponseImagesList)
async def get_images_list(
    q: Optional[str] = Query(None, description="Filter on filename and tags"),
    start: int = Query(0, ge=0),
    limit: int = Query(50, gt=0, le=200),
    db: AsyncSession = Depends(get_db)
):
    """Images matching the filter, newest first"""
    listing_service = ListingService(db)

    try:
        images, total_count = await listing_service.list_images(q, start=start, limit=limit)
        return ResponseImagesList(
            images=images,
            total=total_count,
            start=start,
            limit=limit,
            query=q
        )
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except Exception as e:
        logger.error(f"Error listing images: {str(e)}")
        raise HTTPException(status_code=500, detail="Error listing images")

@router.get("/count", response_model=ImageCountResponse)
async def get_images_count(db: AsyncSession = Depends(get_db)):
    """Number of stored images"""
    try:
        count = await ImageService(db).count_images()
        return ImageCountResponse(count=count)
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
