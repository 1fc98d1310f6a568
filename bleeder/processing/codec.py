"""Image decode/encode on top of Pillow."""

import io
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple

from PIL import Image, UnidentifiedImageError

from bleeder.errors import ConfigError, DecodeError, EncodeError

DEFAULT_JPEG_QUALITY = 100


class ImageFormat(Enum):
    """Image formats the pipeline can read and write."""

    PNG = "png"
    JPEG = "jpeg"

    @property
    def pil_name(self) -> str:
        return self.name

    @property
    def suffix(self) -> str:
        """Canonical file suffix for newly named outputs."""
        return ".png" if self is ImageFormat.PNG else ".jpg"

    @property
    def suffixes(self) -> Tuple[str, ...]:
        return (".png",) if self is ImageFormat.PNG else (".jpg", ".jpeg")

    @property
    def lossy(self) -> bool:
        return self is ImageFormat.JPEG

    @classmethod
    def parse(cls, tag: str) -> "ImageFormat":
        """Parse a user supplied format tag (png, jpg, jpeg)."""
        normalized = tag.strip().lower().lstrip(".")
        if normalized == "png":
            return cls.PNG
        if normalized in ("jpg", "jpeg"):
            return cls.JPEG
        raise ConfigError(f"Unsupported image format: {tag}")

    @classmethod
    def from_pil(cls, pil_format: Optional[str]) -> Optional["ImageFormat"]:
        for fmt in cls:
            if fmt.pil_name == pil_format:
                return fmt
        return None


@dataclass
class DecodedImage:
    """RGBA pixel buffer plus the format it was decoded from."""

    pixels: Image.Image
    format: ImageFormat

    @property
    def width(self) -> int:
        return self.pixels.width

    @property
    def height(self) -> int:
        return self.pixels.height


def decode(data: bytes) -> DecodedImage:
    """Decode PNG or JPEG bytes into an RGBA image.

    Raises:
        DecodeError: data is truncated, corrupt or in an unsupported format
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            fmt = ImageFormat.from_pil(img.format)
            if fmt is None:
                raise DecodeError(f"Unsupported image format: {img.format}")
            img.load()
            pixels = img.convert("RGBA")
    except DecodeError:
        raise
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError) as e:
        raise DecodeError(f"Failed to decode image: {e}") from e

    return DecodedImage(pixels=pixels, format=fmt)


def encode(image: DecodedImage, fmt: ImageFormat, quality: int = DEFAULT_JPEG_QUALITY) -> bytes:
    """Encode an image to PNG or JPEG bytes.

    JPEG has no alpha channel, so pixels are flattened to RGB first.
    """
    if not isinstance(fmt, ImageFormat):
        raise EncodeError(f"Failed to save image - unsupported format: {fmt}")

    buffer = io.BytesIO()
    try:
        if fmt is ImageFormat.PNG:
            image.pixels.save(buffer, format=fmt.pil_name)
        else:
            image.pixels.convert("RGB").save(buffer, format=fmt.pil_name, quality=quality)
    except (OSError, ValueError) as e:
        raise EncodeError(f"Failed to encode {fmt.value}: {e}") from e

    return buffer.getvalue()


def resolve_output_format(requested: Optional[ImageFormat], detected: ImageFormat) -> ImageFormat:
    """Return the forced output format, or the detected one in auto mode (None)."""
    return detected if requested is None else requested


def output_path_for(input_path: Path, output_dir: Path, fmt: ImageFormat, keep_suffix: bool = False) -> Path:
    """Build the output path for an input file.

    Args:
        input_path: Source image path
        output_dir: Directory receiving outputs
        fmt: Resolved output format
        keep_suffix: If True and the input suffix already matches fmt, keep it
                     (photo.jpeg stays photo.jpeg in auto mode)
    """
    input_path = Path(input_path)
    suffix = fmt.suffix
    if keep_suffix and input_path.suffix.lower() in fmt.suffixes:
        suffix = input_path.suffix
    return Path(output_dir) / f"{input_path.stem}{suffix}"
