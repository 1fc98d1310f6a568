"""Bleed geometry: how many pixels of bleed a card image needs."""

import math
from dataclasses import dataclass

# Physical card dimensions (inches)
BLEED_WIDTH_IN = 0.24
CARD_WIDTH_NO_BLEED_IN = 2.48
BLEED_RATIO = BLEED_WIDTH_IN / CARD_WIDTH_NO_BLEED_IN


@dataclass(frozen=True)
class Rect:
    """Half-open integer rectangle [left, right) x [top, bottom)."""

    left: int
    top: int
    right: int
    bottom: int

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    @property
    def box(self) -> tuple[int, int, int, int]:
        """PIL-style (left, upper, right, lower) box."""
        return (self.left, self.top, self.right, self.bottom)

    def inset(self, amount: int) -> "Rect":
        return Rect(self.left + amount, self.top + amount, self.right - amount, self.bottom - amount)

    def contains(self, other: "Rect") -> bool:
        return (
            self.left <= other.left
            and self.top <= other.top
            and other.right <= self.right
            and other.bottom <= self.bottom
        )


@dataclass(frozen=True)
class BleedGeometry:
    """Canvas layout for a card with bleed.

    outer is the full output canvas, inner is where the original art sits.
    """

    bleed_px: int
    outer: Rect
    inner: Rect


def _round_half_away(value: float) -> int:
    # round() would use banker's rounding
    return int(math.floor(value + 0.5)) if value >= 0 else -int(math.floor(-value + 0.5))


def compute_bleed_width_px(width_px: int) -> int:
    """Return the bleed added to each side of an image of the given width.

    The full bleed allowance (0.24in on a 2.48in card) is split evenly
    between opposite edges, so each side gets half of it. DPI is implied by
    the pixel width, which assumes the input has no bleed yet.

    Raises:
        ValueError: width_px is not a positive integer
    """
    if isinstance(width_px, bool) or not isinstance(width_px, int) or width_px <= 0:
        raise ValueError(f"Image width must be a positive integer, got {width_px!r}")

    return _round_half_away(width_px * BLEED_RATIO) // 2


def compute_bleed_geometry(width_px: int, height_px: int) -> BleedGeometry:
    """Compute output canvas and inner art rectangles for a width x height image."""
    if isinstance(height_px, bool) or not isinstance(height_px, int) or height_px <= 0:
        raise ValueError(f"Image height must be a positive integer, got {height_px!r}")

    bleed_px = compute_bleed_width_px(width_px)
    outer = Rect(0, 0, width_px + bleed_px * 2, height_px + bleed_px * 2)
    return BleedGeometry(bleed_px=bleed_px, outer=outer, inner=outer.inset(bleed_px))
