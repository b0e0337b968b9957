from typing import Optional, List
from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError
import logging

from app.models.image import Image
from app.core.exceptions import ResourceNotFoundError, StorageError
from app.service.IO.base_service import BaseService
from app.service.IO.file_services import FileService

logger = logging.getLogger(__name__)

class ImageService(BaseService):
    """Image records"""

    async def get_image_by_id(self, image_id: int) -> Optional[Image]:
        """Get an image (with its thumbnails) by ID"""
        try:
            image_query = select(Image).where(Image.id == image_id)
            result = await self.db.execute(image_query)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error getting image {image_id}: {str(e)}")
            raise StorageError("Database error") from e

    async def get_image_or_404(self, image_id: int) -> Image:
        image = await self.get_image_by_id(image_id)
        if not image:
            raise ResourceNotFoundError(f"Image with id {image_id} not found")
        return image

    async def get_all_images(self) -> List[Image]:
        """All images, oldest first"""
        try:
            result = await self.db.execute(select(Image).order_by(Image.id))
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Error listing images: {str(e)}")
            raise StorageError("Database error") from e

    async def count_images(self) -> int:
        try:
            result = await self.db.execute(select(func.count(Image.id)))
            return result.scalar() or 0
        except SQLAlchemyError as e:
            logger.error(f"Error counting images: {str(e)}")
            raise StorageError("Database error") from e

    async def create_image(
        self,
        filename: str,
        original_filename: str,
        content_type: str,
        byte_size: int,
        tags: str = "",
        width: Optional[int] = None,
        height: Optional[int] = None,
    ) -> Image:
        """Add an image record and flush it; committing is left to the caller"""
        try:
            image = Image(
                filename=filename,
                original_filename=original_filename,
                content_type=content_type,
                byte_size=byte_size,
                tags=tags,
                width=width,
                height=height,
                thumbnails=[],
            )
            self.db.add(image)
            await self.db.flush()
            return image
        except SQLAlchemyError as e:
            logger.error(f"Error creating image record: {str(e)}")
            raise StorageError("Database error") from e

    async def delete_image(self, image_id: int) -> Image:
        """
        Delete an image and, through the cascade, all of its thumbnails.

        The returned object is detached but keeps its loaded attributes, so the
        caller can still read ``filename`` and ``thumbnails`` to clean up files.
        """
        image = await self.get_image_or_404(image_id)
        try:
            await self.db.delete(image)
            await self.db.commit()
            logger.info(f"Deleted image record {image_id} with {len(image.thumbnails)} thumbnails")
            return image
        except SQLAlchemyError as e:
            await self.rollback_db()
            logger.error(f"Error deleting image {image_id}: {str(e)}")
            raise StorageError("Database error") from e

    async def remove_image(self, image_id: int) -> dict:
        """Delete the image record, its thumbnails and all of their files"""
        image = await self.delete_image(image_id)

        thumbnail_files = [FileService.get_thumbnail_path(t.filename) for t in image.thumbnails]
        removed_files = 0
        for file_path in [FileService.get_image_path(image.filename), *thumbnail_files]:
            if FileService.remove_file(file_path):
                removed_files += 1
            else:
                logger.warning(f"File not found or couldn't be deleted: {file_path}")

        logger.info(f"Image {image_id} and its thumbnails deleted successfully")
        return {
            "image_id": image_id,
            "thumbnails_deleted": len(thumbnail_files),
            "files_deleted": removed_files
        }
