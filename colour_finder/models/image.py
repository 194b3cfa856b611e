from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import numpy as np


@dataclass
class Image:
    """
    Simple data object: RGBA pixels (+ optional source path for bookkeeping).
    No decoding logic outside the repository layer.
    """
    pixels: np.ndarray # Shape (H, W, 4), dtype uint8, RGBA order.
    path: Path | None = None # Source of the image.

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])
