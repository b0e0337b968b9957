from typing import Optional, List
from pathlib import Path
from sqlalchemy.exc import SQLAlchemyError
from fastapi import UploadFile
import logging

from app.core.config import settings
from app.core.exceptions import ValidationError, FileTooLargeError, StorageError
from app.models.image import Image
from app.service.IO.base_service import BaseService
from app.service.IO.file_services import FileService
from app.service.IO.image_service import ImageService
from app.service.IO.thumbnail_service import ThumbnailService

logger = logging.getLogger(__name__)

# Magic bytes -> (content type, stored extension)
_SIGNATURES = (
    (b"\x89PNG\r\n\x1a\n", "image/png", ".png"),
    (b"\xff\xd8\xff", "image/jpeg", ".jpg"),
    (b"GIF87a", "image/gif", ".gif"),
    (b"GIF89a", "image/gif", ".gif"),
)

_GENERIC_CONTENT_TYPES = {"", "application/octet-stream"}
_CONTENT_TYPE_ALIASES = {"image/jpg": "image/jpeg", "image/pjpeg": "image/jpeg", "image/x-png": "image/png"}

EXTENSIONS = {content_type: extension for _, content_type, extension in _SIGNATURES}
EXTENSIONS["image/webp"] = ".webp"


def sniff_content_type(data: bytes) -> Optional[str]:
    """Detect the image type from its leading bytes"""
    for signature, content_type, _ in _SIGNATURES:
        if data.startswith(signature):
            return content_type
    if len(data) >= 12 and data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    return None


def client_filename(filename: Optional[str]) -> str:
    """The bare name of a client-supplied path, Windows separators included"""
    name = (filename or "").replace("\\", "/").split("/")[-1].strip()
    if not name:
        raise ValidationError("Filename is required")
    return name


def check_upload_file_size(file: UploadFile) -> int:
    """Reject an oversized upload before it is read into memory"""
    file.file.seek(0, 2)
    file_size = file.file.tell()
    file.file.seek(0)

    if file_size > settings.MAX_FILE_SIZE:
        raise FileTooLargeError(
            f"File too large: {file_size} bytes, limit is {settings.MAX_FILE_SIZE} bytes"
        )
    return file_size


def validate_upload(data: bytes, filename: Optional[str], content_type: Optional[str]) -> str:
    """Check an upload against the configured limits and return its real content type"""
    client_filename(filename)

    if not data:
        raise ValidationError("File is empty")

    if len(data) > settings.MAX_FILE_SIZE:
        raise FileTooLargeError(
            f"File too large: {len(data)} bytes, limit is {settings.MAX_FILE_SIZE} bytes"
        )

    declared = (content_type or "").split(";")[0].strip().lower()
    declared = _CONTENT_TYPE_ALIASES.get(declared, declared)
    if declared not in _GENERIC_CONTENT_TYPES and declared not in settings.ALLOWED_CONTENT_TYPES:
        raise ValidationError(f"File type not supported: {declared}")

    detected = sniff_content_type(data)
    if detected is None:
        raise ValidationError("File is not a recognised image")
    if detected not in settings.ALLOWED_CONTENT_TYPES:
        raise ValidationError(f"File type not supported: {detected}")

    return detected


class UploadService(BaseService):
    """Upload pipeline: validate, store the original, record it, generate thumbnails"""

    async def upload(
        self,
        data: bytes,
        original_filename: Optional[str],
        content_type: Optional[str] = None,
        tags: Optional[str] = None,
    ) -> Image:
        content_type = validate_upload(data, original_filename, content_type)

        image_service = ImageService(self.db)
        thumbnail_service = ThumbnailService(self.db)
        written_files: List[Path] = []

        try:
            unique_filename = FileService.generate_unique_filename(EXTENSIONS[content_type])
            file_path = FileService.get_image_path(unique_filename)
            await FileService.save_bytes(data, file_path)
            written_files.append(file_path)

            image = await image_service.create_image(
                filename=unique_filename,
                original_filename=client_filename(original_filename),
                content_type=content_type,
                byte_size=len(data),
                tags=(tags or "").strip(),
            )

            await thumbnail_service.generate_for_image(
                image,
                data=data,
                commit=False,
                written_files=written_files
            )

            await self.db.commit()
            logger.info(f"Uploaded image {image.id} ({image.original_filename}) with {len(image.thumbnails)} thumbnails")
            return image

        except SQLAlchemyError as e:
            logger.error(f"Error storing upload {original_filename}: {str(e)}")
            await self._discard(written_files)
            raise StorageError("Database error") from e
        except Exception as e:
            logger.error(f"Error uploading image {original_filename}: {str(e)}")
            await self._discard(written_files)
            raise

    async def _discard(self, written_files: List[Path]):
        await self.rollback_db()
        for file_path in written_files:
            FileService.remove_file(file_path)
