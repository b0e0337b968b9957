from fastapi import APIRouter
from app.api.v1.endpoints.images import api as ImagesApi
from app.api.v1.endpoints.thumbnails import api as ThumbnailsApi
router = APIRouter()

router.include_router(ImagesApi.router)
router.include_router(ThumbnailsApi.router)
