"""Main CLI entry point for amp."""

from __future__ import annotations

import argparse
import sys

from .. import __version__
from ..cli.dump import dump_messages, read_input, run_demo
from ..config import CodecConfig
from ..exceptions import AmpError
from ..logging import configure_logging


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the amp CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        prog="amp",
        description="amp: AMP binary message codec",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  amp --demo                      Encode the reference message and print it
  amp --decode message.bin        Decode every message in a file
  amp --decode - --hex < dump.txt Decode hex text from stdin
  amp --version                   Show version
        """,
    )

    parser.add_argument(
        "--demo",
        action="store_true",
        help="Encode a message with one field of each type and print the buffer",
    )

    parser.add_argument(
        "--decode",
        metavar="FILE",
        type=str,
        help="Decode AMP messages from FILE ('-' for stdin) and print their fields",
    )

    parser.add_argument(
        "--hex",
        action="store_true",
        help="Treat --decode input as hexadecimal text",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print a summary line before each decoded message",
    )

    parser.add_argument(
        "--byteorder",
        choices=("big", "little"),
        default="big",
        help="Byte order of BigInt payloads (default: big)",
    )

    parser.add_argument(
        "--log-level",
        metavar="LEVEL",
        default=None,
        help="Log level for codec diagnostics on stderr (default: WARNING)",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"amp {__version__}",
    )

    args = parser.parse_args(argv)

    try:
        configure_logging(log_level=args.log_level)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    config = CodecConfig(bigint_byteorder=args.byteorder)

    if args.demo:
        run_demo(config)
        return 0

    # Handle --decode
    if args.decode:
        try:
            data = read_input(args.decode, args.hex)
        except (OSError, ValueError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

        try:
            dump_messages(data, config, verbose=args.verbose)
            return 0
        except AmpError as e:
            print(f"Error decoding message: {e}", file=sys.stderr)
            return 1

    # If no command specified, show help
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
