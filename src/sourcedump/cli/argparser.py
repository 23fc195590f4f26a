"""Command-line argument parsing for sourcedump.

This module defines the command-line interface for sourcedump,
handling argument parsing and validation.
"""

import argparse
from pathlib import Path

from sourcedump import __version__


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Returns:
        An ArgumentParser instance configured with sourcedump's options.
    """
    description = """
    sourcedump: collect a source tree into a single text document.

    The document has three sections:
    - "## Find Output": every file, one root-relative path per line
    - "## Directory Tree": an indented tree of files and directories
    - "## Source Code": the contents of files whose extension was selected with --ext

    Entries whose name starts with a dot are always skipped. Patterns from the
    target's .gitignore and from --exclude skip a path when the pattern equals the
    path, is a prefix of it, or matches inside it as a regular expression. Skipping
    a directory skips everything below it.
    """

    epilog = """
    Examples:
      # List and tree only, no file contents
      sourcedump -t ./project -o dump.md

      # Include Python and TypeScript sources
      sourcedump -t ./project -o dump.md -x py ts

      # Skip generated code in addition to .gitignore patterns
      sourcedump -t ./project -o dump.md -x py -e build "\\.min\\.js$"

      # Patterns that start with a dash need the = form
      sourcedump -t ./project -x py --exclude=-backup

      # Write to stdout without progress messages
      sourcedump -t ./project -x py -q | less
    """

    parser = argparse.ArgumentParser(
        prog="sourcedump",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"sourcedump {__version__}", help="Show the version and exit"
    )
    parser.add_argument(
        "-t",
        "--target",
        type=Path,
        required=True,
        metavar="DIR",
        help="Directory to dump. All paths in the output are relative to it.",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="FILE",
        help="Output file path, truncated before writing. If not specified, output is written to stdout.",
    )
    parser.add_argument(
        "-x",
        "--ext",
        nargs="*",
        action="extend",
        default=[],
        metavar="EXT",
        help=(
            "File extensions whose contents are included (e.g. py ts md). Case-insensitive, "
            "leading dot optional. Can be given multiple times."
        ),
    )
    parser.add_argument(
        "-e",
        "--exclude",
        nargs="*",
        action="extend",
        default=[],
        metavar="PATTERN",
        help=(
            "Additional ignore patterns, applied after those from the target's .gitignore. Each is "
            "tried as an exact path, a path prefix, and a regular expression. Can be given multiple times."
        ),
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Do not report processed and skipped files on stderr.",
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Performs additional validation beyond what argparse can handle.

    Args:
        args: Parsed command-line arguments.

    Raises:
        ValueError: If any arguments fail validation.
    """
    if not args.target.is_dir():
        raise ValueError(f"Target is not a directory: {args.target}")
