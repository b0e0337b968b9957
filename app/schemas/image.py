from pydantic import BaseModel
from typing import List, Optional
import datetime

class ResultResponse(BaseModel):
    success: bool
    message: str
    data: Optional[dict] = None

class ThumbnailResponse(BaseModel):
    id: int
    image_id: int
    max_width: int
    max_height: int
    width: int
    height: int
    filename: str
    content_type: str
    byte_size: int
    created_at: datetime.datetime

    class Config:
        from_attributes = True

class ImageResponse(BaseModel):
    id: int
    original_filename: str
    filename: str
    content_type: str
    byte_size: int
    width: Optional[int] = None
    height: Optional[int] = None
    tags: str = ""
    created_at: datetime.datetime
    thumbnails: List[ThumbnailResponse] = []

    class Config:
        from_attributes = True

class ResponseImagesList(BaseModel):
    images: List[ImageResponse]
    total: int
    start: int
    limit: int
    query: Optional[str] = None

class ImageCountResponse(BaseModel):
    count: int
