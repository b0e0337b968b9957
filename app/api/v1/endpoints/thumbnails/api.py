from fastapi import APIRouter
from app.api.v1.endpoints.thumbnails import backfill, download_thumbnail


router = APIRouter()

router.include_router(backfill.router, prefix="/thumbnails", tags=["thumbnails"])
router.include_router(download_thumbnail.router, prefix="/thumbnails", tags=["thumbnails"])
