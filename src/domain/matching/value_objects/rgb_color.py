"""
RGBColor Value Object.

Dominant-colour summary of a design reference or an artist portfolio.
Parsed from the "rgb(r, g, b)" strings produced by image analysis or from
"#rrggbb" hex notation.
"""

import math
import re
from dataclasses import dataclass
from typing import Final

from src.domain.shared.exceptions import InvalidInputError

from ..constants import MAX_RGB_DISTANCE

# rgb(255, 0, 10), RGB( 1,2,3 )
RGB_FUNCTION_PATTERN: Final[re.Pattern] = re.compile(
    r"^\s*rgb\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*\)\s*$", re.IGNORECASE
)
# #ff000a
HEX_PATTERN: Final[re.Pattern] = re.compile(r"^\s*#([0-9a-f]{6})\s*$", re.IGNORECASE)


@dataclass(frozen=True)
class RGBColor:
    """
    Immutable 3-channel colour (0-255 per channel).

    Examples:
        >>> RGBColor.from_string("rgb(255, 0, 0)")
        RGBColor(red=255, green=0, blue=0)
        >>> RGBColor.from_string("#000000").distance(RGBColor(255, 255, 255))
        441.6729559300637
    """

    red: int
    green: int
    blue: int

    def __post_init__(self) -> None:
        for channel in ("red", "green", "blue"):
            value = getattr(self, channel)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidInputError(
                    f"{channel} must be an integer, got {type(value).__name__}",
                    field_name=channel,
                )
            if not 0 <= value <= 255:
                raise InvalidInputError(
                    f"{channel} must be between 0 and 255, got {value}",
                    field_name=channel,
                )

    @classmethod
    def from_string(cls, text: str) -> "RGBColor":
        """
        Parse "rgb(r, g, b)" or "#rrggbb".

        Raises:
            InvalidInputError: If the text is not a recognised colour
        """
        if not isinstance(text, str) or not text.strip():
            raise InvalidInputError("Cannot parse colour from empty input")

        match = RGB_FUNCTION_PATTERN.match(text)
        if match:
            return cls(*(int(group) for group in match.groups()))

        match = HEX_PATTERN.match(text)
        if match:
            hex_value = match.group(1)
            return cls(
                int(hex_value[0:2], 16),
                int(hex_value[2:4], 16),
                int(hex_value[4:6], 16),
            )

        raise InvalidInputError(f"Unrecognised colour format: {text!r}")

    @classmethod
    def coerce(cls, value: "RGBColor | str | list | tuple | dict") -> "RGBColor":
        """Accept an RGBColor, a colour string, an (r, g, b) sequence or a dict."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.from_string(value)
        if isinstance(value, dict):
            try:
                return cls(value["red"], value["green"], value["blue"])
            except KeyError as e:
                raise InvalidInputError(f"Colour is missing channel {e}") from None
        if isinstance(value, (list, tuple)) and len(value) == 3:
            return cls(*value)
        raise InvalidInputError(f"Unrecognised colour value: {value!r}")

    def distance(self, other: "RGBColor") -> float:
        """Euclidean distance in RGB space (0 to 255 * sqrt(3))."""
        return math.sqrt(
            (self.red - other.red) ** 2
            + (self.green - other.green) ** 2
            + (self.blue - other.blue) ** 2
        )

    def similarity(self, other: "RGBColor") -> float:
        """1 - distance / max distance, in [0, 1]."""
        return max(0.0, 1.0 - self.distance(other) / MAX_RGB_DISTANCE)

    def to_string(self) -> str:
        return f"rgb({self.red}, {self.green}, {self.blue})"

    def __str__(self) -> str:
        return self.to_string()
