"""Filesystem job discovery: turn an input path into bleed jobs."""

import os
from pathlib import Path
from typing import Iterator

from bleeder.errors import InputNotFoundError, InputReadError
from bleeder.processing.job import BleedJob

SUPPORTED_EXTENSIONS = (".png", ".jpg", ".jpeg")


def is_supported(name: str) -> bool:
    """Case-sensitive extension check, same as the directory filter."""
    return os.path.splitext(name)[1] in SUPPORTED_EXTENSIONS


def discover_jobs(root: Path) -> Iterator[BleedJob]:
    """Return jobs for a single file or for the images directly inside a directory.

    A single file always yields one job regardless of extension. Directories
    are not searched recursively; subdirectories and unsupported extensions
    are skipped. Order follows the directory listing and is not sorted.

    The root is checked and listed before this returns, so missing or
    unreadable inputs fail immediately rather than on first iteration.

    Raises:
        InputNotFoundError: root does not exist
        InputReadError: root is a directory that cannot be listed
    """
    root = Path(root)
    if not root.exists():
        raise InputNotFoundError(f"Input path not found: {root}", root)

    if not root.is_dir():
        return iter([BleedJob(input_path=root)])

    try:
        with os.scandir(root) as it:
            entries = [(entry.name, entry.is_dir()) for entry in it]
    except OSError as e:
        raise InputReadError(f"Failed to read input directory: {e}", root) from e

    return (BleedJob(input_path=root / name) for name, is_dir in entries if not is_dir and is_supported(name))
