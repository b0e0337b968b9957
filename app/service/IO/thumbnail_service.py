from typing import Optional, List, Sequence, Tuple
from pathlib import Path
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
import asyncio
import logging

from app.core.config import settings
from app.core.exceptions import ResourceNotFoundError, StorageError
from app.core.executor import get_executor
from app.models.image import Image
from app.models.thumbnail import Thumbnail
from app.service.IO.base_service import BaseService
from app.service.IO.file_services import FileService
from app.service.computation.thumbnail_generator import ThumbnailGenerator, GeneratedThumbnails

logger = logging.getLogger(__name__)

class ThumbnailService(BaseService):
    """Thumbnail records and generation for stored images"""

    async def get_thumbnail_by_id(self, thumbnail_id: int) -> Optional[Thumbnail]:
        try:
            result = await self.db.execute(select(Thumbnail).where(Thumbnail.id == thumbnail_id))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error getting thumbnail {thumbnail_id}: {str(e)}")
            raise StorageError("Database error") from e

    async def get_thumbnail_or_404(self, thumbnail_id: int) -> Thumbnail:
        thumbnail = await self.get_thumbnail_by_id(thumbnail_id)
        if not thumbnail:
            raise ResourceNotFoundError(f"Thumbnail with id {thumbnail_id} not found")
        return thumbnail

    async def get_thumbnails_for_image(self, image_id: int) -> List[Thumbnail]:
        """Thumbnails of an image, smallest bound first"""
        try:
            query = select(Thumbnail)\
                .where(Thumbnail.image_id == image_id)\
                .order_by(Thumbnail.max_width, Thumbnail.max_height)
            result = await self.db.execute(query)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Error getting thumbnails for image {image_id}: {str(e)}")
            raise StorageError("Database error") from e

    async def get_primary_thumbnail(self, image_id: int) -> Thumbnail:
        """The smallest thumbnail of an image"""
        thumbnails = await self.get_thumbnails_for_image(image_id)
        if not thumbnails:
            raise ResourceNotFoundError(f"Image with id {image_id} has no thumbnails")
        return thumbnails[0]

    def get_thumbnail_file_path(self, thumbnail: Thumbnail) -> Path:
        return FileService.get_thumbnail_path(thumbnail.filename)

    def add_thumbnail(
        self,
        image: Image,
        max_width: int,
        max_height: int,
        width: int,
        height: int,
        filename: str,
        content_type: str,
        byte_size: int,
    ) -> Thumbnail:
        """Attach a new thumbnail record to ``image``; it is inserted on the next flush"""
        thumbnail = Thumbnail(
            max_width=max_width,
            max_height=max_height,
            width=width,
            height=height,
            filename=filename,
            content_type=content_type,
            byte_size=byte_size,
        )
        image.thumbnails.append(thumbnail)
        return thumbnail

    async def delete_thumbnail(self, image: Image, thumbnail: Thumbnail, commit: bool = False) -> bool:
        """
        Remove a thumbnail record and its file.

        The row is flushed (or committed) before the file goes, so a database
        failure leaves both in place. Returns whether a file was removed.
        """
        thumbnail_id, image_id = thumbnail.id, image.id
        file_path = self.get_thumbnail_file_path(thumbnail)
        try:
            image.thumbnails.remove(thumbnail)
            if commit:
                await self.db.commit()
            else:
                await self.db.flush()
        except SQLAlchemyError as e:
            await self.rollback_db()
            logger.error(f"Error deleting thumbnail {thumbnail_id}: {str(e)}")
            raise StorageError("Database error") from e

        logger.info(f"Deleted thumbnail record {thumbnail_id} of image {image_id}")
        return FileService.remove_file(file_path)

    async def generate_for_image(
        self,
        image: Image,
        sizes: Optional[Sequence[Tuple[int, int]]] = None,
        data: Optional[bytes] = None,
        commit: bool = True,
        written_files: Optional[List[Path]] = None,
    ) -> GeneratedThumbnails:
        """
        Render thumbnails of ``image`` for every bound in ``sizes`` and record them.

        ``data`` skips reading the original back from disk. With ``commit=False``
        the rows are only flushed and the caller owns the transaction; every file
        written is appended to ``written_files`` so the caller can undo them.
        On failure with ``commit=True`` the transaction is rolled back and the
        files removed here.
        """
        sizes = list(sizes if sizes is not None else settings.THUMBNAIL_SIZES)
        written = written_files if written_files is not None else []
        first_written = len(written)
        # Attributes are unreadable once a failed flush leaves the session pending rollback
        image_id, image_filename = image.id, image.filename

        try:
            if data is None:
                data = await FileService.read_bytes(FileService.get_image_path(image_filename))

            # CPU-bound work goes to the worker pool
            loop = asyncio.get_running_loop()
            generated = await loop.run_in_executor(
                get_executor(),
                ThumbnailGenerator.generate,
                data,
                sizes,
                settings.THUMBNAIL_QUALITY
            )

            for rendered in generated.thumbnails:
                filename = FileService.thumbnail_filename(image_filename, rendered.max_width, rendered.max_height)
                file_path = FileService.get_thumbnail_path(filename)
                await FileService.save_bytes(rendered.data, file_path)
                written.append(file_path)

                self.add_thumbnail(
                    image,
                    max_width=rendered.max_width,
                    max_height=rendered.max_height,
                    width=rendered.width,
                    height=rendered.height,
                    filename=filename,
                    content_type=rendered.content_type,
                    byte_size=len(rendered.data),
                )

            if image.width is None or image.height is None:
                image.width, image.height = generated.width, generated.height

            if commit:
                await self.db.commit()
            else:
                await self.db.flush()

            logger.info(f"Generated {len(generated.thumbnails)} thumbnails for image {image_id}")
            return generated

        except SQLAlchemyError as e:
            if commit:
                await self._undo(written[first_written:])
            logger.error(f"Error recording thumbnails for image {image_id}: {str(e)}")
            raise StorageError("Database error") from e
        except Exception:
            if commit:
                await self._undo(written[first_written:])
            raise

    async def _undo(self, files: List[Path]):
        await self.rollback_db()
        for file_path in files:
            FileService.remove_file(file_path)
