from dataclasses import dataclass, field
from typing import List, Sequence, Tuple
import cv2
import numpy as np
from app.service.image_processor import ImageProcessor
from app.core.exceptions import DecodeError, ValidationError


@dataclass
class RenderedThumbnail:
    max_width: int
    max_height: int
    width: int
    height: int
    data: bytes
    content_type: str = "image/jpeg"


@dataclass
class GeneratedThumbnails:
    """Original dimensions plus one rendered thumbnail per requested bound"""
    width: int
    height: int
    thumbnails: List[RenderedThumbnail] = field(default_factory=list)


class ThumbnailGenerator:
    @staticmethod
    def decode(image_bytes: bytes) -> np.ndarray:
        """Decode PNG/JPEG bytes into a BGR array"""
        if not image_bytes:
            raise DecodeError("Image data is empty")
        try:
            buffer = np.frombuffer(image_bytes, dtype=np.uint8)
            bgr_image = cv2.imdecode(buffer, cv2.IMREAD_COLOR)
        except cv2.error as e:
            raise DecodeError(f"Unable to decode image: {str(e)}") from e
        if bgr_image is None or bgr_image.size == 0:
            raise DecodeError("Unable to decode image: data is corrupt or truncated")
        return bgr_image

    @staticmethod
    def scaled_size(width: int, height: int, max_width: int, max_height: int) -> Tuple[int, int]:
        """
        Fit (width, height) inside (max_width, max_height) keeping the aspect ratio.
        Images already inside the bound keep their size.
        """
        if max_width <= 0 or max_height <= 0:
            raise ValidationError(f"Invalid thumbnail bound {max_width}x{max_height}")
        if width <= 0 or height <= 0:
            raise DecodeError(f"Invalid image dimensions {width}x{height}")

        ratio = min(max_width / width, max_height / height, 1.0)
        new_width = min(max_width, max(1, round(width * ratio)))
        new_height = min(max_height, max(1, round(height * ratio)))
        return new_width, new_height

    @staticmethod
    def render(bgr_image: np.ndarray, max_width: int, max_height: int, quality: int) -> RenderedThumbnail:
        """Resize one image to fit the bound and encode it as JPEG"""
        try:
            processor = ImageProcessor(bgr_image)
            width, height = ThumbnailGenerator.scaled_size(*processor.getSize(), max_width, max_height)
            resized = processor.resizeTo(width, height)
            data = processor.encodeJpeg(resized, quality)
        except (ValidationError, DecodeError):
            raise
        except (cv2.error, ValueError) as e:
            raise DecodeError(f"Error rendering {max_width}x{max_height} thumbnail: {str(e)}") from e

        return RenderedThumbnail(
            max_width=max_width,
            max_height=max_height,
            width=width,
            height=height,
            data=data,
        )

    @staticmethod
    def generate(image_bytes: bytes, sizes: Sequence[Tuple[int, int]], quality: int) -> GeneratedThumbnails:
        """Decode once and render every requested bound"""
        if not sizes:
            raise ValidationError("No thumbnail sizes configured")
        bgr_image = ThumbnailGenerator.decode(image_bytes)
        height, width = bgr_image.shape[:2]
        result = GeneratedThumbnails(width=width, height=height)
        for max_width, max_height in sizes:
            result.thumbnails.append(
                ThumbnailGenerator.render(bgr_image, max_width, max_height, quality)
            )
        return result
