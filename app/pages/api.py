from fastapi import APIRouter
from app.pages import gallery, upload

router = APIRouter()

router.include_router(gallery.router, tags=["pages"])
router.include_router(upload.router, tags=["pages"])
