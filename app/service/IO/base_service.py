from abc import ABC
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
import logging

logger = logging.getLogger(__name__)

class BaseService(ABC):
    """Base class for database-backed services"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def rollback_db(self):
        """Roll back the current transaction"""
        try:
            await self.db.rollback()
            logger.info("Database transaction rolled back")
        except SQLAlchemyError as e:
            logger.error(f"Error during database rollback: {str(e)}")
