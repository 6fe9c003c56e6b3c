"""Main CLI entry point for borshwire."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from structlog import get_logger

from .. import __version__
from ..codec.encoder import serialize
from ..demo import (
    UPDATE_INSTRUCTION_HEX,
    ZEROED_ACCOUNT_HEX,
    new_account,
    update_instruction,
    zeroed_state,
)
from ..exceptions import BorshwireError
from .analyze import analyze_file, decode_hex
from .util import setup_logging

logger = get_logger()


def run_demo() -> None:
    """Print the demo account and Update instruction encodings."""
    account_hex = serialize(new_account(zeroed_state())).hex()
    print("Account bytes (hex):", account_hex)
    print("Matches expected:", account_hex == ZEROED_ACCOUNT_HEX)

    instruction_hex = serialize(update_instruction()).hex()
    print("Update instruction (hex):", instruction_hex)
    print("Matches expected:", instruction_hex == UPDATE_INSTRUCTION_HEX)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the borshwire CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        description="borshwire: Borsh Wire Codec",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  borshwire --demo                                   Encode the demo account
  borshwire --analyze schema.py                      Show the wire layout of each type
  borshwire --module schema.py --type Account --decode 0100...
                                                     Decode hex as a type
  borshwire --version                                Show version
        """,
    )

    parser.add_argument("--demo", action="store_true", help="Encode the demo account and instruction")
    parser.add_argument(
        "--analyze",
        metavar="FILE",
        type=str,
        help="Analyze message schemas and show field layouts",
    )
    parser.add_argument("--decode", metavar="HEX", type=str, help="Hex data to decode")
    parser.add_argument("--module", metavar="FILE", type=str, help="File defining the type to decode")
    parser.add_argument("--type", metavar="NAME", type=str, help="Type identifier to decode as")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--json-logs", action="store_true", help="Log as JSON")
    parser.add_argument(
        "--version",
        action="version",
        version=f"borshwire {__version__}",
    )

    args = parser.parse_args(argv)
    setup_logging(debug=args.debug, json=args.json_logs)

    if args.demo:
        run_demo()
        return 0

    if args.analyze:
        file_path = Path(args.analyze)
        if not file_path.exists():
            print(f"Error: File not found: {file_path}", file=sys.stderr)
            return 1

        try:
            analyze_file(file_path)
            return 0
        except (BorshwireError, ValueError) as e:
            print(f"Error analyzing file: {e}", file=sys.stderr)
            return 1

    if args.decode is not None:
        if not args.module or not args.type:
            print("Error: --decode requires --module and --type", file=sys.stderr)
            return 1
        file_path = Path(args.module)
        if not file_path.exists():
            print(f"Error: File not found: {file_path}", file=sys.stderr)
            return 1

        try:
            value = decode_hex(file_path, args.type, args.decode)
        except (BorshwireError, ValueError) as e:
            logger.debug("decode failed", type=args.type, error=str(e))
            print(f"Error decoding data: {e}", file=sys.stderr)
            return 1
        print(repr(value))
        return 0

    # If no command specified, show help
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
