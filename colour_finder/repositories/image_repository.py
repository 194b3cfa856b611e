from io import BytesIO
from pathlib import Path
from typing import Union
import logging

import numpy as np
from PIL import Image as PILImage

from ..errors import DecodeFailure
from ..models.focus_region import ImageSource
from ..models.image import Image

logger = logging.getLogger(__name__)


class ImageRepository:
    """
    Handles decoding of caller-supplied sources into RGBA Image entities.
    """

    @staticmethod
    def create_image(pixels: np.ndarray, path: Union[str, Path] = None) -> Image:
        if path is None:
            return Image(pixels)
        return Image(pixels=pixels, path=Path(path))

    @staticmethod
    def retrieve_image_dimensions(img: Image):
        return img.pixels.shape[:2]

    @staticmethod
    def _decode(fp, label: str) -> np.ndarray:
        try:
            with PILImage.open(fp) as pil_img:
                pil_img.load()
                arr = np.asarray(pil_img.convert("RGBA"), dtype=np.uint8)
        except Exception as err:
            raise DecodeFailure(f"Could not decode image from {label}: {err}") from err
        logger.debug(f"Decoded {label}: {arr.shape[1]}x{arr.shape[0]}")
        return arr

    def load(self, path: Union[str, Path]) -> Image:
        path = Path(path)
        if not path.is_file():
            raise DecodeFailure(f"Image not found or unreadable: {path}")
        return Image(pixels=self._decode(path, str(path)), path=path)

    def load_bytes(self, data: bytes) -> Image:
        return Image(pixels=self._decode(BytesIO(data), f"{len(data)} bytes"))

    def load_stream(self, stream) -> Image:
        # Pillow reads from the current position; the stream stays open.
        return Image(pixels=self._decode(stream, "stream"))

    def load_source(self, source: ImageSource) -> Image:
        if isinstance(source, Image):
            return source
        if isinstance(source, (bytes, bytearray, memoryview)):
            return self.load_bytes(bytes(source))
        if isinstance(source, (str, Path)):
            return self.load(source)
        if hasattr(source, "read"):
            return self.load_stream(source)
        raise DecodeFailure(f"Unsupported image source type: {type(source).__name__}")
