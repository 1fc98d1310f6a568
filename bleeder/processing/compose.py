"""Canvas composition: black bleed margin around the original art."""

from typing import List

from PIL import Image

from bleeder.logger import logger as LOGGER

from .codec import DecodedImage
from .geometry import Rect, compute_bleed_geometry

BLACK = (0, 0, 0, 255)

# Corner patch length along its short axis, as a fraction of the bleed
CORNER_FIX_RATIO = 0.75


def corner_fix_rects(inner: Rect, bleed_px: int) -> List[Rect]:
    """Return the rectangles painted black by the JPEG corner fix.

    Two patches per corner of the inner (art) rectangle, one wide and one
    tall, each CORNER_FIX_RATIO * bleed_px by bleed_px, anchored on the
    corner and covering the art's corner pixels.
    """
    short = int(bleed_px * CORNER_FIX_RATIO)
    if short <= 0 or bleed_px <= 0:
        return []

    rects = []
    for x_anchor, x_dir in ((inner.left, 1), (inner.right, -1)):
        for y_anchor, y_dir in ((inner.top, 1), (inner.bottom, -1)):
            for dx, dy in ((short, bleed_px), (bleed_px, short)):
                x0, x1 = sorted((x_anchor, x_anchor + x_dir * dx))
                y0, y1 = sorted((y_anchor, y_anchor + y_dir * dy))
                rects.append(Rect(max(x0, inner.left), max(y0, inner.top), min(x1, inner.right), min(y1, inner.bottom)))
    return rects


def fix_corners(canvas: Image.Image, inner: Rect, bleed_px: int) -> None:
    """Paint over light fringing left by lossy encoding at the art's corners."""
    for rect in corner_fix_rects(inner, bleed_px):
        canvas.paste(BLACK, rect.box)


def composite(original: DecodedImage, bleed_px: int, corner_fix_enabled: bool = False) -> DecodedImage:
    """Place the original image on a black canvas grown by bleed_px on every side.

    Args:
        original: Decoded source image
        bleed_px: Bleed added to each side
        corner_fix_enabled: Apply the corner fix (only for lossy sources)

    Returns:
        New DecodedImage with the same source format tag
    """
    if bleed_px < 0:
        raise ValueError(f"Bleed must be non-negative, got {bleed_px}")

    width, height = original.width, original.height
    outer = Rect(0, 0, width + bleed_px * 2, height + bleed_px * 2)
    inner = outer.inset(bleed_px)

    canvas = Image.new("RGBA", (outer.width, outer.height), BLACK)
    canvas.alpha_composite(original.pixels.convert("RGBA"), dest=(inner.left, inner.top))

    if corner_fix_enabled and original.format.lossy:
        LOGGER.debug(f"Applying corner fix ({bleed_px}px bleed)")
        fix_corners(canvas, inner, bleed_px)

    return DecodedImage(pixels=canvas, format=original.format)


def add_bleed(original: DecodedImage, corner_fix_enabled: bool = False) -> DecodedImage:
    """Compute the bleed for the image's width and composite it."""
    geometry = compute_bleed_geometry(original.width, original.height)
    LOGGER.debug(
        f"Bleed {geometry.bleed_px}px: {original.width}x{original.height} -> "
        f"{geometry.outer.width}x{geometry.outer.height}"
    )
    return composite(original, geometry.bleed_px, corner_fix_enabled)
