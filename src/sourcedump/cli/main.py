"""Command-line interface for sourcedump.

This module provides the command-line entry point, which writes a source dump of
a directory to a file or to stdout and reports per-file progress on stderr.

Exit Codes:
    0: Successful completion
    1: Runtime error during execution
    2: Command-line syntax error
    126: Permission denied
    130: Interrupted by SIGINT (Ctrl+C)
    141: Broken pipe (SIGPIPE) on Unix-like systems

Example:
    # Dump Python sources of a project
    $ sourcedump -t /path/to/project -o dump.md -x py
"""

import sys

from sourcedump.cli.argparser import create_parser, validate_args
from sourcedump.cli.safe_writer import SafeWriter
from sourcedump.cli.signal_handler import interrupt_monitor, setup_signal_handling
from sourcedump.file_content_printer import ContentDecision
from sourcedump.source_dump import StreamingSourceDump

EXIT_ERROR = 1
EXIT_PERMISSION_DENIED = 126


def format_progress(decision: ContentDecision, relative_path: str) -> str:
    """Format the console message for one file of the source code section.

    Example:
        >>> format_progress(ContentDecision.PROCESSED, "src/main.py")
        'Processed: src/main.py'
        >>> format_progress(ContentDecision.SKIPPED, "README")
        'Ignored (not target extension): README'
    """
    if decision == ContentDecision.PROCESSED:
        return f"Processed: {relative_path}"
    return f"Ignored (not target extension): {relative_path}"


def report_progress(decision: ContentDecision, relative_path: str) -> None:
    print(format_progress(decision, relative_path), file=sys.stderr)


def main() -> None:
    """Main entry point for the sourcedump command-line interface.

    Any filesystem error during the walk or while reading a file aborts the run;
    nothing is retried and the partially written output is left as is.
    """
    setup_signal_handling()

    try:
        parser = create_parser()
        # argparse exits with status 2 on syntax errors and 0 for --version
        args = parser.parse_args()
        validate_args(args)

        dump = StreamingSourceDump(args.target, target_extensions=args.ext, exclude_patterns=args.exclude)
        progress = None if args.quiet else report_progress

        output_file = args.output if args.output else sys.stdout.fileno()
        with SafeWriter(output_file) as safe_writer:
            try:
                for chunk in dump.stream(progress):
                    safe_writer.write(chunk)
            except BrokenPipeError:
                pass  # SafeWriter will automatically close in the context manager

    except PermissionError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(EXIT_PERMISSION_DENIED)
    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(EXIT_ERROR)

    exit_code = interrupt_monitor.exit_code()
    if exit_code is not None:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
