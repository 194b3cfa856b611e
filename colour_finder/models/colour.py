from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Tuple

from ..errors import InvalidColour


@dataclass(frozen=True)
class RGBColour:
    """Transient (r, g, b) value, every channel an int in [0, 255]."""
    r: int
    g: int
    b: int

    def __post_init__(self):
        for name in ("r", "g", "b"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise InvalidColour(f"Channel {name}={value} is outside [0, 255]")

    def as_tuple(self) -> Tuple[int, int, int]:
        return self.r, self.g, self.b


BLACK = RGBColour(0, 0, 0)
WHITE = RGBColour(255, 255, 255)


@dataclass(frozen=True)
class ColourResult:
    """
    Colour metadata for one focus region. Every field is a `#RRGGBB` string.
    """
    average: str
    brightest: str
    opposite: str      # inverse of the average colour
    text_colour: str   # black or white, whichever reads best on the average

    def to_dict(self) -> Dict[str, str]:
        return {
            "Average": self.average,
            "Brightest": self.brightest,
            "Opposite": self.opposite,
            "TextColour": self.text_colour,
        }
