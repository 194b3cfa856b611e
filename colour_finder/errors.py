from __future__ import annotations
from typing import Tuple


class ColourFinderError(Exception):
    """Base class for every error raised by the colour finder."""


class RegionOutOfBounds(ColourFinderError, ValueError):
    """
    The requested focus rectangle does not fit inside the source image
    (or has a non-positive width/height).
    """

    def __init__(self, rectangle: Tuple[int, int, int, int], image_size: Tuple[int, int]):
        self.rectangle = rectangle      # (x, y, width, height)
        self.image_size = image_size    # (width, height)
        x, y, w, h = rectangle
        img_w, img_h = image_size
        super().__init__(
            f"Region (x={x}, y={y}, width={w}, height={h}) "
            f"is outside image bounds {img_w}x{img_h}"
        )


class InvalidColour(ColourFinderError, ValueError):
    """A hex string or RGB triple that cannot be turned into a colour."""


class DecodeFailure(ColourFinderError):
    """The image bytes could not be decoded."""
