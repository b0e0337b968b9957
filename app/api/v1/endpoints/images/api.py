from fastapi import APIRouter
from app.api.v1.endpoints.images import upload_image, get_images_list,\
get_image_info, download_image, remove_image


router = APIRouter()

# Static paths before /{image_id}
router.include_router(upload_image.router, prefix="/images", tags=["images"])
router.include_router(get_images_list.router, prefix="/images", tags=["images"])
router.include_router(get_image_info.router, prefix="/images", tags=["images"])
router.include_router(download_image.router, prefix="/images", tags=["images"])
router.include_router(remove_image.router, prefix="/images", tags=["images"])
