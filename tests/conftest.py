from io import BytesIO

import numpy as np
import pytest
from PIL import Image as PILImage


def png_bytes(pixels: np.ndarray) -> bytes:
    """Encode an (H, W, 3|4) uint8 array as PNG."""
    buffer = BytesIO()
    PILImage.fromarray(pixels).save(buffer, format="PNG")
    return buffer.getvalue()


def uniform(width: int, height: int, rgb, alpha: int = 255) -> np.ndarray:
    pixels = np.empty((height, width, 4), dtype=np.uint8)
    pixels[..., :3] = rgb
    pixels[..., 3] = alpha
    return pixels


@pytest.fixture
def rgbw_pixels() -> np.ndarray:
    """2x2: red, green / blue, white."""
    return np.array(
        [
            [[255, 0, 0, 255], [0, 255, 0, 255]],
            [[0, 0, 255, 255], [255, 255, 255, 255]],
        ],
        dtype=np.uint8,
    )


@pytest.fixture
def rgbw_png(rgbw_pixels) -> bytes:
    return png_bytes(rgbw_pixels)
