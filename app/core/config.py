from typing import List, Tuple
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    APP_NAME: str = "Image Thumbnail Service"
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./thumbnails.db"
    DB_ECHO: bool = False

    # Uploads
    UPLOAD_DIR: str = "uploads"
    MAX_FILE_SIZE: int = 10 * 1024 * 1024  # 10MB
    ALLOWED_CONTENT_TYPES: List[str] = ["image/png", "image/jpeg"]

    # Thumbnails: (max_width, max_height) bounds, smallest first
    THUMBNAIL_SIZES: List[Tuple[int, int]] = [(100, 100), (300, 300)]
    THUMBNAIL_QUALITY: int = 85
    FILL_MISSING_THUMBNAILS_ON_STARTUP: bool = True

    # Gallery
    PAGE_SIZE: int = 50

    CORS_ORIGINS: List[str] = ["*"]


settings = Settings()
