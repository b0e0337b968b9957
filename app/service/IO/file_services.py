import aiofiles
import uuid
from pathlib import Path
from app.core.config import settings
from app.core.exceptions import StorageError
import logging

logger = logging.getLogger(__name__)

class FileService:
    """Filesystem storage for originals and thumbnails"""

    @staticmethod
    def generate_unique_filename(extension: str) -> str:
        """Generate a unique stored filename with the given extension"""
        extension = extension if extension.startswith(".") else f".{extension}"
        return f"{uuid.uuid4().hex}{extension.lower()}"

    @staticmethod
    def thumbnail_filename(image_filename: str, max_width: int, max_height: int) -> str:
        """
        Thumbnail name derived from the original's stored name and the size bound.

        Each call gets its own suffix, so two generations of the same bound never
        write to the same file.
        """
        return f"{Path(image_filename).stem}_{max_width}x{max_height}_{uuid.uuid4().hex[:8]}.jpg"

    @staticmethod
    def get_images_directory() -> Path:
        return Path(settings.UPLOAD_DIR) / "images"

    @staticmethod
    def get_thumbnails_directory() -> Path:
        return Path(settings.UPLOAD_DIR) / "thumbnails"

    @staticmethod
    def create_upload_directories() -> None:
        """Create the originals and thumbnails directories"""
        FileService.get_images_directory().mkdir(parents=True, exist_ok=True)
        FileService.get_thumbnails_directory().mkdir(parents=True, exist_ok=True)

    @staticmethod
    def get_image_path(filename: str) -> Path:
        return FileService.get_images_directory() / filename

    @staticmethod
    def get_thumbnail_path(filename: str) -> Path:
        return FileService.get_thumbnails_directory() / filename

    @staticmethod
    def file_exists(file_path: Path) -> bool:
        return file_path.exists() and file_path.is_file()

    @staticmethod
    async def save_bytes(data: bytes, file_path: Path) -> None:
        """Write bytes to storage, refusing to overwrite an existing file"""
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(file_path, 'xb') as f:
                await f.write(data)
            logger.info(f"File saved: {file_path}")
        except OSError as e:
            logger.error(f"Error saving file {file_path}: {str(e)}")
            raise StorageError(f"Error saving file {file_path.name}") from e

    @staticmethod
    async def read_bytes(file_path: Path) -> bytes:
        """Read a stored file"""
        try:
            async with aiofiles.open(file_path, 'rb') as f:
                return await f.read()
        except FileNotFoundError as e:
            raise StorageError(f"File {file_path.name} is missing from storage") from e
        except OSError as e:
            logger.error(f"Error reading file {file_path}: {str(e)}")
            raise StorageError(f"Error reading file {file_path.name}") from e

    @staticmethod
    def remove_file(file_path: Path) -> bool:
        """Delete a file"""
        try:
            if file_path.exists() and file_path.is_file():
                file_path.unlink()
                logger.info(f"Deleted file: {file_path}")
                return True
            else:
                logger.warning(f"File not found: {file_path}")
                return False
        except OSError as e:
            logger.error(f"Error deleting file {file_path}: {str(e)}")
            return False
