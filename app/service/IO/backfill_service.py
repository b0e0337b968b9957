from typing import Dict
from sqlalchemy.exc import SQLAlchemyError
import logging

from app.core.config import settings
from app.core.exceptions import AppBaseException
from app.core.task_manager import task_manager, TaskStatus
from app.service.IO.base_service import BaseService
from app.service.IO.file_services import FileService
from app.service.IO.image_service import ImageService
from app.service.IO.thumbnail_service import ThumbnailService

logger = logging.getLogger(__name__)

class BackfillService(BaseService):
    """Regenerates thumbnails missing from the database or from disk"""

    async def fill_missing_thumbnails(self) -> Dict[str, int]:
        image_service = ImageService(self.db)
        thumbnail_service = ThumbnailService(self.db)
        wanted = [tuple(size) for size in settings.THUMBNAIL_SIZES]
        stats = {"checked": 0, "generated": 0, "failed": 0}

        image_ids = [image.id for image in await image_service.get_all_images()]

        for image_id in image_ids:
            try:
                # Re-select each time: a rollback expires everything loaded earlier
                image = await image_service.get_image_by_id(image_id)
                if image is None:
                    continue
                stats["checked"] += 1

                for thumbnail in list(image.thumbnails):
                    if not FileService.file_exists(thumbnail_service.get_thumbnail_file_path(thumbnail)):
                        logger.warning(f"Thumbnail file {thumbnail.filename} of image {image_id} is missing")
                        await thumbnail_service.delete_thumbnail(image, thumbnail)

                present = {(t.max_width, t.max_height) for t in image.thumbnails}
                missing = [size for size in wanted if size not in present]
                if not missing:
                    # Commit any dropped stale rows
                    await self.db.commit()
                    continue

                await thumbnail_service.generate_for_image(image, sizes=missing)
                stats["generated"] += len(missing)
            except (AppBaseException, SQLAlchemyError) as e:
                await self.rollback_db()
                stats["failed"] += 1
                logger.error(f"Could not backfill thumbnails for image {image_id}: {str(e)}")

        logger.info(
            f"Thumbnail backfill finished: {stats['checked']} images checked, "
            f"{stats['generated']} thumbnails generated, {stats['failed']} failures"
        )
        return stats

    async def run_backfill_task(self, task_id: str):
        """Background wrapper that reports progress to the task manager"""
        task_manager.update_task(task_id, TaskStatus.PROCESSING, message="Regenerating missing thumbnails")
        try:
            stats = await self.fill_missing_thumbnails()
            task_manager.update_task(
                task_id,
                TaskStatus.COMPLETED,
                message=f"{stats['generated']} thumbnails generated",
                result=stats
            )
        except Exception as e:
            logger.error(f"Backfill task {task_id} failed: {str(e)}")
            task_manager.update_task(task_id, TaskStatus.FAILED, message="Backfill failed", error=str(e))
