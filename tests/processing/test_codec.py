"""Tests for the image codec adapter."""

import io
from pathlib import Path

import pytest
from PIL import Image

from bleeder.errors import ConfigError, DecodeError, EncodeError
from bleeder.processing.codec import (
    DecodedImage,
    ImageFormat,
    decode,
    encode,
    output_path_for,
    resolve_output_format,
)


def image_bytes(fmt: str, size=(40, 56), color=(200, 30, 30)) -> bytes:
    """Encode a solid test image with Pillow."""
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format=fmt)
    return buffer.getvalue()


def test_parse_format_tags():
    """Test format tag parsing."""
    assert ImageFormat.parse("png") is ImageFormat.PNG
    assert ImageFormat.parse("PNG") is ImageFormat.PNG
    assert ImageFormat.parse("jpg") is ImageFormat.JPEG
    assert ImageFormat.parse("jpeg") is ImageFormat.JPEG
    assert ImageFormat.parse(".jpeg") is ImageFormat.JPEG


@pytest.mark.parametrize("tag", ["gif", "webp", "auto", ""])
def test_parse_rejects_unknown(tag):
    """Test that unsupported tags are configuration errors."""
    with pytest.raises(ConfigError):
        ImageFormat.parse(tag)


def test_format_properties():
    """Test suffixes and lossiness."""
    assert ImageFormat.PNG.suffix == ".png"
    assert ImageFormat.JPEG.suffix == ".jpg"
    assert ImageFormat.JPEG.suffixes == (".jpg", ".jpeg")
    assert ImageFormat.JPEG.lossy
    assert not ImageFormat.PNG.lossy


def test_decode_png():
    """Test decoding PNG bytes to RGBA."""
    image = decode(image_bytes("PNG"))

    assert image.format is ImageFormat.PNG
    assert image.pixels.mode == "RGBA"
    assert (image.width, image.height) == (40, 56)
    assert image.pixels.getpixel((0, 0)) == (200, 30, 30, 255)


def test_decode_jpeg():
    """Test decoding JPEG bytes."""
    image = decode(image_bytes("JPEG"))

    assert image.format is ImageFormat.JPEG
    assert image.pixels.mode == "RGBA"
    assert image.pixels.size == (40, 56)


def test_decode_garbage():
    """Test that random bytes fail to decode."""
    with pytest.raises(DecodeError):
        decode(b"definitely not an image")


def test_decode_truncated_png():
    """Test that a truncated PNG fails to decode."""
    data = image_bytes("PNG", size=(200, 200))
    with pytest.raises(DecodeError):
        decode(data[: len(data) // 2])


def test_decode_unsupported_format():
    """Test that a valid GIF is rejected as unsupported."""
    with pytest.raises(DecodeError, match="Unsupported"):
        decode(image_bytes("GIF"))


def test_encode_png_keeps_alpha():
    """Test PNG encoding is lossless and keeps alpha."""
    img = Image.new("RGBA", (8, 8), (10, 20, 30, 128))
    data = encode(DecodedImage(pixels=img, format=ImageFormat.PNG), ImageFormat.PNG)

    with Image.open(io.BytesIO(data)) as reopened:
        assert reopened.format == "PNG"
        assert reopened.convert("RGBA").getpixel((3, 3)) == (10, 20, 30, 128)


def test_encode_jpeg():
    """Test JPEG encoding drops alpha."""
    img = Image.new("RGBA", (8, 8), (0, 0, 0, 255))
    data = encode(DecodedImage(pixels=img, format=ImageFormat.PNG), ImageFormat.JPEG, quality=90)

    with Image.open(io.BytesIO(data)) as reopened:
        assert reopened.format == "JPEG"
        assert reopened.mode == "RGB"


def test_encode_unsupported():
    """Test that an unknown target format raises EncodeError."""
    img = DecodedImage(pixels=Image.new("RGBA", (4, 4)), format=ImageFormat.PNG)
    with pytest.raises(EncodeError):
        encode(img, "gif")


def test_resolve_output_format():
    """Test forced vs auto output format."""
    assert resolve_output_format(None, ImageFormat.JPEG) is ImageFormat.JPEG
    assert resolve_output_format(ImageFormat.PNG, ImageFormat.JPEG) is ImageFormat.PNG
    assert resolve_output_format(ImageFormat.JPEG, ImageFormat.PNG) is ImageFormat.JPEG


def test_output_path_for():
    """Test output naming."""
    out = Path("out")
    assert output_path_for(Path("in/card.jpg"), out, ImageFormat.PNG) == out / "card.png"
    assert output_path_for(Path("in/card.png"), out, ImageFormat.JPEG) == out / "card.jpg"
    assert output_path_for(Path("in/card.jpeg"), out, ImageFormat.JPEG) == out / "card.jpg"
    assert output_path_for(Path("in/card.jpeg"), out, ImageFormat.JPEG, keep_suffix=True) == out / "card.jpeg"
    assert output_path_for(Path("in/card.png"), out, ImageFormat.JPEG, keep_suffix=True) == out / "card.jpg"
    assert output_path_for(Path("in/card"), out, ImageFormat.PNG) == out / "card.png"
