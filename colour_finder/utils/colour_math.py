import string

import numpy as np

from ..errors import InvalidColour
from ..models.colour import BLACK, WHITE, RGBColour

# Rec. 601 luma weights, in thousandths so brightness stays exact.
_WEIGHTS = np.array([299, 587, 114], dtype=np.int64)
_TEXT_THRESHOLD = 186
_HEX_DIGITS = set(string.hexdigits)


def _weighted_sum(r: int, g: int, b: int) -> int:
    return 299 * r + 587 * g + 114 * b


def perceived_brightness(r: int, g: int, b: int) -> float:
    """0.299*R + 0.587*G + 0.114*B, not truncated."""
    return _weighted_sum(r, g, b) / 1000


def average_colour(pixels: np.ndarray) -> RGBColour:
    """
    Per-channel mean of an (H, W, 3|4) grid, floor-divided. Alpha is ignored.

    The grid must not be empty.
    """
    rgb = pixels[..., :3].reshape(-1, 3)
    total = len(rgb)
    if total == 0:
        raise ValueError("Cannot average an empty pixel grid")

    sums = rgb.astype(np.int64).sum(axis=0)
    r, g, b = (int(s) // total for s in sums)
    return RGBColour(r, g, b)


def brightest_colour(pixels: np.ndarray) -> RGBColour:
    """
    Pixel with the greatest truncated perceived brightness.

    Scans row-major; the first pixel reaching the maximum wins. A grid
    that is empty or entirely at brightness 0 yields black.
    """
    rgb = pixels[..., :3].reshape(-1, 3)
    if len(rgb) == 0:
        return BLACK

    brightness = (rgb.astype(np.int64) @ _WEIGHTS) // 1000
    idx = int(np.argmax(brightness))  # first occurrence on ties
    if brightness[idx] <= 0:
        return BLACK
    r, g, b = (int(c) for c in rgb[idx])
    return RGBColour(r, g, b)


def invert_colour(colour: RGBColour) -> RGBColour:
    return RGBColour(255 - colour.r, 255 - colour.g, 255 - colour.b)


def contrast_text_colour(colour: RGBColour) -> RGBColour:
    """
    Black text for backgrounds brighter than 186, white otherwise.
    See https://stackoverflow.com/a/3943023/112731
    """
    if _weighted_sum(colour.r, colour.g, colour.b) > _TEXT_THRESHOLD * 1000:
        return BLACK
    return WHITE


def normalize_hex(hex_value: str) -> RGBColour:
    """
    Parse `#rgb`, `#rrggbb` or `#rrggbbaa` (leading '#' optional).
    The alpha pair of the 8-digit form is dropped.
    """
    value = hex_value[1:] if hex_value.startswith("#") else hex_value

    # 3-digit shorthand: every digit doubled
    if len(value) == 3:
        value = "".join(ch * 2 for ch in value)

    if len(value) == 8:
        value = value[:6]

    if len(value) != 6:
        raise InvalidColour(f"Invalid HEX colour: {hex_value!r}")
    if not set(value) <= _HEX_DIGITS:
        raise InvalidColour(f"Invalid HEX colour: {hex_value!r}")

    return RGBColour(int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))


def to_hex(colour: RGBColour) -> str:
    return "#{:02X}{:02X}{:02X}".format(colour.r, colour.g, colour.b)


def opposite_hex(hex_value: str) -> str:
    """Inverse of a hex colour, as `#RRGGBB`."""
    return to_hex(invert_colour(normalize_hex(hex_value)))


def text_colour_hex(hex_value: str) -> str:
    """`#000000` or `#FFFFFF`, whichever reads best on `hex_value`."""
    return to_hex(contrast_text_colour(normalize_hex(hex_value)))
