from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Tuple, Union

from .image import Image

ImageSource = Union[bytes, str, Path, BinaryIO, Image]


@dataclass(frozen=True)
class FocusRegion:
    """
    A rectangle of interest inside a source image.

    `source` is whatever the caller holds: raw encoded bytes, a file path,
    an open binary stream, or an already decoded Image. The stream stays
    owned by the caller and is never closed here.
    """
    source: ImageSource
    x: int
    y: int
    width: int
    height: int

    @property
    def rectangle(self) -> Tuple[int, int, int, int]:
        return self.x, self.y, self.width, self.height

    def bounds(self) -> Tuple[int, int, int, int]:
        """(left, top, right, bottom), right/bottom exclusive."""
        return self.x, self.y, self.x + self.width, self.y + self.height
