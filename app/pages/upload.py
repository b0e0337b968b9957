from typing import Optional
from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.responses import HTMLResponse
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.exceptions import AppBaseException, ValidationError
from app.db.session import get_db
from app.pages.templating import templates, render_error, error_status, IMAGES_CHANGED_TRIGGER
from app.service.IO.image_service import ImageService
from app.service.IO.upload_service import UploadService, check_upload_file_size
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("/upload", response_class=HTMLResponse)
async def uploader(
    request: Request,
    image: Optional[UploadFile] = File(None),
    tags: str = Form(""),
    db: AsyncSession = Depends(get_db)
):
    """Upload form target: answers with the new image card"""
    try:
        if image is None or not image.filename:
            raise ValidationError("No image selected")
        check_upload_file_size(image)
        data = await image.read()
        created = await UploadService(db).upload(
            data=data,
            original_filename=image.filename,
            content_type=image.content_type,
            tags=tags
        )
    except AppBaseException as e:
        return render_error(request, str(e), error_status(e))
    except Exception as e:
        logger.error(f"Error uploading image from form: {str(e)}")
        return render_error(request, "Error uploading image", 500)

    return templates.TemplateResponse(
        request,
        "partials/thumbnail.html",
        {"image": created},
        headers=IMAGES_CHANGED_TRIGGER
    )

@router.delete("/image/{image_id}", response_class=HTMLResponse)
async def delete_image(
    request: Request,
    image_id: int,
    db: AsyncSession = Depends(get_db)
):
    """Delete button target: the card is swapped for nothing"""
    try:
        await ImageService(db).remove_image(image_id)
    except AppBaseException as e:
        return render_error(request, str(e), error_status(e))
    return HTMLResponse("", headers=IMAGES_CHANGED_TRIGGER)
