from typing import Optional, List
from sqlalchemy import select, func, or_, desc
from sqlalchemy.exc import SQLAlchemyError
import logging

from app.models.image import Image
from app.core.exceptions import StorageError
from app.service.IO.base_service import BaseService

logger = logging.getLogger(__name__)

class ListingService(BaseService):
    """Gallery listing and search"""

    @staticmethod
    def _filter_clause(query_text: Optional[str]):
        text = (query_text or "").strip()
        if not text:
            return None
        return or_(
            Image.original_filename.icontains(text, autoescape=True),
            Image.tags.icontains(text, autoescape=True),
        )

    async def list_images(
        self,
        query_text: Optional[str] = None,
        start: int = 0,
        limit: int = 50
    ) -> tuple[List[Image], int]:
        """Images matching the filter, newest first, with the total match count"""
        clause = self._filter_clause(query_text)
        try:
            count_query = select(func.count(Image.id))
            images_query = select(Image)\
                .order_by(desc(Image.created_at), desc(Image.id))\
                .offset(start)\
                .limit(limit)
            if clause is not None:
                count_query = count_query.where(clause)
                images_query = images_query.where(clause)

            total_count = (await self.db.execute(count_query)).scalar() or 0
            images = (await self.db.execute(images_query)).scalars().all()

            logger.info(f"Listed {len(images)} of {total_count} images for filter '{query_text or ''}'")
            return list(images), total_count
        except SQLAlchemyError as e:
            logger.error(f"Error listing images for filter '{query_text}': {str(e)}")
            raise StorageError("Database error") from e
