from pathlib import Path
from typing import Union
import logging

import cv2
import numpy as np

from ..config import DEFAULT_SAMPLE_SIZE
from ..errors import RegionOutOfBounds
from ..models.focus_region import FocusRegion, ImageSource
from ..models.image import Image
from ..repositories.image_repository import ImageRepository

logger = logging.getLogger(__name__)


class ImageService:
    """Decoding, cropping and resampling.  No colour logic."""
    def __init__(self):
        self.image_repository = ImageRepository()

    def create_image(self, pixels: np.ndarray, path: Union[str, Path] = None) -> Image:
        return self.image_repository.create_image(pixels, path)

    def load(self, source: ImageSource) -> Image:
        """Decode bytes, a path, a stream (or pass through an Image)."""
        return self.image_repository.load_source(source)

    def get_image_dimensions(self, img: Image):
        return self.image_repository.retrieve_image_dimensions(img)

    def crop_pixels(self, img: Image, bound_r, bound_l, bound_t, bound_b) -> np.ndarray:
        """
        Copy of the pixels inside [bound_l, bound_r) x [bound_t, bound_b).

        Raises:
            RegionOutOfBounds: if the box is empty or leaves the image.
        """
        img_h, img_w = self.get_image_dimensions(img)
        width = bound_r - bound_l
        height = bound_b - bound_t

        if (width <= 0 or height <= 0 or bound_l < 0 or bound_t < 0
                or bound_r > img_w or bound_b > img_h):
            raise RegionOutOfBounds((bound_l, bound_t, width, height), (img_w, img_h))

        return img.pixels[bound_t:bound_b, bound_l:bound_r].copy()

    @staticmethod
    def resample(pixels: np.ndarray, target_width: int, target_height: int) -> np.ndarray:
        """
        Resize to (target_height, target_width).

        Each axis is resized on its own. A shrinking axis uses INTER_AREA, i.e.
        output pixels are area-weighted means of the source pixels they cover.
        A growing axis uses INTER_NEAREST, so no colours are interpolated.
        """
        src_h, src_w = pixels.shape[:2]
        if (src_w, src_h) == (target_width, target_height):
            return pixels.copy()

        out = np.ascontiguousarray(pixels)
        if target_width != src_w:
            interpolation = cv2.INTER_AREA if target_width < src_w else cv2.INTER_NEAREST
            out = cv2.resize(out, (target_width, src_h), interpolation=interpolation)
        if target_height != src_h:
            interpolation = cv2.INTER_AREA if target_height < src_h else cv2.INTER_NEAREST
            out = cv2.resize(out, (target_width, target_height), interpolation=interpolation)
        return out

    def crop_and_resample(
            self,
            img: Image,
            region: FocusRegion,
            target_width: int = DEFAULT_SAMPLE_SIZE,
            target_height: int = DEFAULT_SAMPLE_SIZE,
    ) -> Image:
        """
        Crop `img` to `region` and return a *new* target_width x target_height Image.
        The pixels of `img` are left untouched.
        """
        left, top, right, bottom = region.bounds()
        cropped = self.crop_pixels(img, bound_r=right, bound_l=left,
                                   bound_t=top, bound_b=bottom)
        sampled = self.resample(cropped, target_width, target_height)
        logger.debug(
            f"Sampled region {region.rectangle} of {img.width}x{img.height} "
            f"to {target_width}x{target_height}"
        )
        return self.create_image(sampled, img.path)
