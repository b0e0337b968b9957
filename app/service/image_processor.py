import cv2
import numpy as np

class ImageProcessor:
    def __init__(self, bgrImage):
        if bgrImage is None:
            raise ValueError("Image is empty")
        self.image = bgrImage

    def getSize(self) -> tuple:
        """(width, height) of the wrapped image"""
        height, width = self.image.shape[:2]
        return width, height

    def resizeTo(self, width: int, height: int) -> np.ndarray:
        if (width, height) == self.getSize():
            return self.image
        # Area interpolation for downscaling
        return cv2.resize(self.image, (width, height), interpolation=cv2.INTER_AREA)

    def encodeJpeg(self, image: np.ndarray, quality: int) -> bytes:
        success, encoded = cv2.imencode('.jpg', image, [cv2.IMWRITE_JPEG_QUALITY, quality])
        if not success:
            raise ValueError("Failed to encode image as JPEG")
        return encoded.tobytes()
