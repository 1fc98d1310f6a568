"""Main CLI entry point for bleeder."""

import argparse
import sys

from .commands.bleed import setup_bleed_arguments


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="bleeder", description="Add print bleed to card images (png, jpg)"
    )

    setup_bleed_arguments(parser)

    args = parser.parse_args(argv)

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
