"""Main CLI entry point for tmplpack."""

from __future__ import annotations

import argparse
import ast
import logging
import sys
from typing import Any

from .. import __version__
from ..cli.analyze import analyze_template
from ..codec import pack, unpack
from ..exceptions import TmplpackError


def parse_value(text: str) -> Any:
    """Parse a command-line value as a Python literal, falling back to text."""
    try:
        return ast.literal_eval(text)
    except (ValueError, SyntaxError):
        return text


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the tmplpack CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        prog="tmplpack",
        description="tmplpack: template-driven binary packing",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  tmplpack --analyze "N n a8"               Show directive sizes
  tmplpack --pack "n C A4" 513 7 abc        Pack values, print hex
  tmplpack --unpack "n C A4" 02010761626320 Unpack hex input
        """,
    )

    parser.add_argument(
        "--analyze",
        metavar="TEMPLATE",
        type=str,
        help="Show the directives of a template and their sizes",
    )

    parser.add_argument(
        "--pack",
        metavar="ARG",
        nargs="+",
        help="Pack values: TEMPLATE VALUE... (values are Python literals or text)",
    )

    parser.add_argument(
        "--unpack",
        metavar=("TEMPLATE", "HEX"),
        nargs=2,
        help="Unpack hex-encoded bytes with a template",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"tmplpack {__version__}",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.analyze is not None:
            analyze_template(args.analyze)
            return 0

        if args.pack is not None:
            template, *raw_values = args.pack
            data = pack([parse_value(value) for value in raw_values], template)
            print(data.hex())
            return 0

        if args.unpack is not None:
            template, hex_data = args.unpack
            print(unpack(bytes.fromhex(hex_data), template))
            return 0
    except (TmplpackError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # If no command specified, show help
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
