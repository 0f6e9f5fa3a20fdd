"""RGB color value with hex parsing and lightness/hue transforms.

Channels are stored normalized to ``0.0 … 1.0``.  Every transform is
pure: it returns a new :class:`Color` and clamps each channel back
into range, so no operation can produce an out-of-gamut value.
"""

from __future__ import annotations

import colorsys
import string
from dataclasses import dataclass

from tinct.exceptions import InvalidHexError

_HEX_DIGITS = frozenset(string.hexdigits)


def _clamp(value: float) -> float:
    return min(1.0, max(0.0, value))


def _to_byte(value: float) -> int:
    return round(_clamp(value) * 255)


@dataclass(frozen=True, slots=True)
class Color:
    """An sRGB color with normalized floating-point channels."""

    red: float
    green: float
    blue: float

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_bytes(cls, red: int, green: int, blue: int) -> Color:
        """Build a color from 8-bit channel values."""
        return cls(red / 255, green / 255, blue / 255)

    @classmethod
    def from_hex(cls, text: str) -> Color:
        """Parse a ``#RRGGBB`` string.

        Raises
        ------
        InvalidHexError
            If *text* is not exactly ``#`` followed by six hex digits.
        """
        if len(text) != 7 or not text.startswith("#"):
            raise InvalidHexError(text)
        digits = text[1:]
        if not all(ch in _HEX_DIGITS for ch in digits):
            raise InvalidHexError(text)
        return cls.from_bytes(
            int(digits[0:2], 16),
            int(digits[2:4], 16),
            int(digits[4:6], 16),
        )

    # ------------------------------------------------------------------
    # Formatting
    # ------------------------------------------------------------------

    def to_bytes(self) -> tuple[int, int, int]:
        return _to_byte(self.red), _to_byte(self.green), _to_byte(self.blue)

    def to_hex(self) -> str:
        """Format as lowercase ``#rrggbb``."""
        red, green, blue = self.to_bytes()
        return f"#{red:02x}{green:02x}{blue:02x}"

    def to_rgba(self, alpha: float) -> str:
        """Format as ``rgba(r, g, b, a)`` with *alpha* to two decimals."""
        red, green, blue = self.to_bytes()
        return f"rgba({red}, {green}, {blue}, {alpha:.2f})"

    # ------------------------------------------------------------------
    # Transforms
    # ------------------------------------------------------------------

    def lighten(self, amount: float) -> Color:
        """Move every channel toward white by *amount* (``0`` … ``1``)."""
        return Color(
            _clamp(self.red + (1.0 - self.red) * amount),
            _clamp(self.green + (1.0 - self.green) * amount),
            _clamp(self.blue + (1.0 - self.blue) * amount),
        )

    def darken(self, amount: float) -> Color:
        """Move every channel toward black by *amount* (``0`` … ``1``)."""
        return Color(
            _clamp(self.red * (1.0 - amount)),
            _clamp(self.green * (1.0 - amount)),
            _clamp(self.blue * (1.0 - amount)),
        )

    def shift_hue(self, degrees: float) -> Color:
        """Rotate the HSL hue by *degrees*."""
        hue, lightness, saturation = colorsys.rgb_to_hls(self.red, self.green, self.blue)
        hue = (hue + degrees / 360.0) % 1.0
        return Color(*(_clamp(c) for c in colorsys.hls_to_rgb(hue, lightness, saturation)))

    def saturate(self, amount: float) -> Color:
        """Move the HSL saturation toward full by *amount* (``0`` … ``1``)."""
        hue, lightness, saturation = colorsys.rgb_to_hls(self.red, self.green, self.blue)
        saturation = _clamp(saturation + (1.0 - saturation) * amount)
        return Color(*(_clamp(c) for c in colorsys.hls_to_rgb(hue, lightness, saturation)))
