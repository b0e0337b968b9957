from typing import Optional
from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import HTMLResponse
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.config import settings
from app.core.exceptions import StorageError
from app.db.session import get_db
from app.pages.templating import templates, is_htmx, render_error
from app.service.IO.image_service import ImageService
from app.service.IO.listing_service import ListingService
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

async def _render_gallery(request: Request, db: AsyncSession, q: Optional[str], full_page: bool) -> HTMLResponse:
    try:
        images, total = await ListingService(db).list_images(q, start=0, limit=settings.PAGE_SIZE)
        context = {"images": images, "total": total, "q": q or ""}
        if full_page:
            context["count"] = await ImageService(db).count_images()
            return templates.TemplateResponse(request, "index.html", context)
        return templates.TemplateResponse(request, "partials/image_list.html", context)
    except StorageError as e:
        logger.error(f"Error rendering gallery: {str(e)}")
        return render_error(request, str(e), 500)

@router.get("/", response_class=HTMLResponse)
async def home_page(
    request: Request,
    q: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db)
):
    """Gallery page; htmx requests get the image list fragment only"""
    return await _render_gallery(request, db, q, full_page=not is_htmx(request))

@router.get("/images-html", response_class=HTMLResponse)
async def render_images(
    request: Request,
    q: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db)
):
    return await _render_gallery(request, db, q, full_page=False)

@router.post("/search", response_class=HTMLResponse)
async def search_images(
    request: Request,
    q: str = Form(""),
    db: AsyncSession = Depends(get_db)
):
    """Filtered image list fragment"""
    return await _render_gallery(request, db, q, full_page=False)

@router.get("/image-count", response_class=HTMLResponse)
async def image_count_page(db: AsyncSession = Depends(get_db)):
    try:
        count = await ImageService(db).count_images()
    except StorageError as e:
        return HTMLResponse(str(e), status_code=500)
    return HTMLResponse(f"{count} images in the database")
