from typing import Optional
from fastapi import APIRouter, UploadFile, File, HTTPException, Depends, Form
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.exceptions import ValidationError, FileTooLargeError, DecodeError, StorageError
from app.schemas.image import ImageResponse
from app.service.IO.upload_service import UploadService, check_upload_file_size
from app.db.session import get_db
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("/upload", response_model=ImageResponse)
async def upload_image(
    file: UploadFile = File(...),
    tags: Optional[str] = Form(None),
    db: AsyncSession = Depends(get_db)
):
    """Upload an image and generate its thumbnails"""
    upload_service = UploadService(db)

    try:
        check_upload_file_size(file)
        data = await file.read()
        image = await upload_service.upload(
            data=data,
            original_filename=file.filename,
            content_type=file.content_type,
            tags=tags
        )
        return image

    except FileTooLargeError as e:
        raise HTTPException(status_code=413, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except DecodeError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error uploading image: {str(e)}")
        raise HTTPException(status_code=500, detail="Error uploading image")
