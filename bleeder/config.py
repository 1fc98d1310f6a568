"""Run configuration: output policy and optional JSON config file."""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from bleeder.errors import ConfigError
from bleeder.processing.codec import DEFAULT_JPEG_QUALITY, ImageFormat

DEFAULT_INPUT = "."
DEFAULT_OUTPUT_DIR = "./bleeder_out"
DEFAULT_FORMAT = "png"

AUTO_FORMAT = "auto"
FORMAT_CHOICES = ("png", "jpg", AUTO_FORMAT)

CONFIG_KEYS = {
    "input": str,
    "output": str,
    "overwrite": bool,
    "format": str,
    "corner_fix": bool,
    "quality": int,
    "workers": int,
}


@dataclass(frozen=True)
class OutputPolicy:
    """How outputs are written. Built once per run and shared read-only.

    output_format None means auto: keep the detected input format.
    """

    output_format: Optional[ImageFormat] = ImageFormat.PNG
    overwrite_existing: bool = False
    corner_fix_enabled: bool = False
    jpeg_quality: int = DEFAULT_JPEG_QUALITY

    def __post_init__(self):
        if not 1 <= self.jpeg_quality <= 100:
            raise ConfigError(f"JPEG quality must be between 1 and 100, got {self.jpeg_quality}")

    @property
    def auto_format(self) -> bool:
        return self.output_format is None


def parse_output_format(tag: str) -> Optional[ImageFormat]:
    """Parse png/jpg/jpeg/auto; auto becomes None."""
    if tag.strip().lower() == AUTO_FORMAT:
        return None
    return ImageFormat.parse(tag)


def build_policy(
    format_tag: str = DEFAULT_FORMAT,
    overwrite: bool = False,
    corner_fix: bool = False,
    quality: int = DEFAULT_JPEG_QUALITY,
) -> OutputPolicy:
    """Build an OutputPolicy from raw option values."""
    return OutputPolicy(
        output_format=parse_output_format(format_tag),
        overwrite_existing=overwrite,
        corner_fix_enabled=corner_fix,
        jpeg_quality=quality,
    )


def load_config(path: Path) -> Dict[str, Any]:
    """Load option defaults from a JSON config file.

    Returns:
        Dict of validated option values keyed as in CONFIG_KEYS
    """
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}", path)

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        raise ConfigError(f"Failed to load config file {path}: {e}", path) from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file must contain a JSON object: {path}", path)

    for key, value in data.items():
        expected = CONFIG_KEYS.get(key)
        if expected is None:
            raise ConfigError(f"Unknown config key: {key}", path)
        # bool is a subclass of int
        if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
            raise ConfigError(f"Config key {key} must be {expected.__name__}, got {value!r}", path)

    if "format" in data and data["format"].lower() not in FORMAT_CHOICES:
        raise ConfigError(f"Unsupported output format in config: {data['format']}", path)

    return data
