"""Bleed CLI command."""

import argparse
from pathlib import Path

from bleeder.config import (
    DEFAULT_FORMAT,
    DEFAULT_INPUT,
    DEFAULT_OUTPUT_DIR,
    FORMAT_CHOICES,
    build_policy,
    load_config,
)
from bleeder.errors import BleederError
from bleeder.logger import setup_logging
from bleeder.processing.codec import DEFAULT_JPEG_QUALITY
from bleeder.processing.pipeline import run_bleed
from bleeder.processing.pool import DEFAULT_WORKERS

# argparse dest -> config file key, with the built-in default
OPTION_DEFAULTS = {
    "input": ("input", DEFAULT_INPUT),
    "out": ("output", DEFAULT_OUTPUT_DIR),
    "overwrite": ("overwrite", False),
    "fmt": ("format", DEFAULT_FORMAT),
    "corner_fix": ("corner_fix", False),
    "quality": ("quality", DEFAULT_JPEG_QUALITY),
    "workers": ("workers", DEFAULT_WORKERS),
}


def resolve_options(args) -> dict:
    """Merge built-in defaults, config file values and explicit flags (in that order)."""
    file_values = load_config(Path(args.config)) if args.config else {}

    options = {}
    for dest, (key, default) in OPTION_DEFAULTS.items():
        value = getattr(args, dest)
        if value is None:
            value = file_values.get(key, default)
        options[dest] = value
    return options


def cmd_bleed(args):
    """Add bleed to an image file or a directory of images."""
    setup_logging(args.verbose)

    try:
        options = resolve_options(args)
        policy = build_policy(
            format_tag=options["fmt"],
            overwrite=options["overwrite"],
            corner_fix=options["corner_fix"],
            quality=options["quality"],
        )
        if options["workers"] <= 0:
            print(f"Error: --workers must be positive, got {options['workers']}")
            return 1

        summary = run_bleed(
            Path(options["input"]),
            Path(options["out"]),
            policy,
            workers=options["workers"],
        )
    except BleederError as e:
        print(f"✗ {e}")
        return 1

    print(f"{summary.done} processed, {summary.skipped} skipped, {summary.failed} failed")
    for failure in summary.failures[:5]:  # Show first 5 failures
        print(f"  ✗ {failure.job.input_path}: {failure.error}")

    print(f"Done! See results in {summary.output_dir}")
    return 0


def setup_bleed_arguments(parser: argparse.ArgumentParser) -> None:
    """Add bleed options to a parser.

    Defaults are None so values from --config can fill in unset flags.
    """
    parser.add_argument("-i", "--input", default=None, help=f"File or folder to read in from (default: {DEFAULT_INPUT})")
    parser.add_argument("-o", "--out", default=None, help=f"Folder to output to (default: {DEFAULT_OUTPUT_DIR})")
    parser.add_argument(
        "-w",
        "--overwrite",
        action="store_true",
        default=None,
        help="Overwrite output images with the same name that already exist",
    )
    parser.add_argument(
        "--fmt",
        choices=FORMAT_CHOICES,
        default=None,
        help=f"Output format of cards (default: {DEFAULT_FORMAT}). Auto keeps the input format",
    )
    parser.add_argument(
        "--jcf",
        "--jpg-corner-fix",
        dest="corner_fix",
        action="store_true",
        default=None,
        help="Jpg Corner Fix - removes white artifacts from the corners of jpeg cards",
    )
    parser.add_argument(
        "-q", "--quality", type=int, default=None, help=f"JPEG output quality 1-100 (default: {DEFAULT_JPEG_QUALITY})"
    )
    parser.add_argument(
        "--workers", type=int, default=None, help=f"Number of concurrent workers (default: {DEFAULT_WORKERS})"
    )
    parser.add_argument("--config", default=None, help="JSON file with default option values")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.set_defaults(func=cmd_bleed)
