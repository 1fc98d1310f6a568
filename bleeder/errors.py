"""Error types raised by the bleed pipeline."""

from pathlib import Path
from typing import Optional


class BleederError(Exception):
    """Base class for all bleeder errors."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


# Fatal errors, abort the run before any job is processed


class ConfigError(BleederError):
    """Invalid configuration value (unknown output format, bad config file)."""


class InputNotFoundError(BleederError):
    """Input file or directory does not exist."""


class InputReadError(BleederError):
    """Input directory exists but could not be listed."""


class OutputDirCreateError(BleederError):
    """Output directory could not be created."""


# Per-job errors, reported against a single file


class DecodeError(BleederError):
    """Image bytes are corrupt or not a supported format."""


class EncodeError(BleederError):
    """Image could not be encoded to the requested format."""


class FileIOError(BleederError):
    """Reading the input or writing the output failed."""
