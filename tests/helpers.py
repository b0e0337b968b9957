import cv2
import numpy as np


def encode_image(width: int, height: int, ext: str = ".png") -> bytes:
    """Solid-colour test image of the given size"""
    pixels = np.full((height, width, 3), (40, 120, 200), dtype=np.uint8)
    success, encoded = cv2.imencode(ext, pixels)
    assert success
    return encoded.tobytes()
