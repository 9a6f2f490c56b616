"""
Command-line entry point for the ZenLang lexer.

Usage:
    zlc program.zl                 # all reports
    zlc program.zl --tokens        # token stream only
    zlc program.zl --strict        # exit 1 on any lexical error
"""

import argparse
import logging
import sys
from typing import List, Optional

from .lexer.lexer import Lexer
from .report import (
    format_token_stream, format_statistics, format_identifier_table, format_error_report,
)
from .utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_LEXICAL_ERRORS = 1
EXIT_IO_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zlc",
        description="Scan a ZenLang source file and report its tokens",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    zlc program.zl                     # token stream, statistics, identifiers, errors
    zlc program.zl --tokens --errors   # selected reports only
    zlc program.zl --strict            # non-zero exit status on lexical errors
        """
    )
    parser.add_argument('source', help='ZenLang source file')

    # Report selection
    parser.add_argument('--tokens', action='store_true', help='Print the token stream')
    parser.add_argument('--stats', action='store_true', help='Print scan statistics')
    parser.add_argument('--symbols', action='store_true', help='Print the identifier table')
    parser.add_argument('--errors', action='store_true', help='Print the error report')

    # Behaviour
    parser.add_argument('--strict', action='store_true',
                        help='Exit with status 1 when any lexical error is found')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        with open(args.source, "r", encoding="utf-8") as f:
            source = f.read()
    except (OSError, UnicodeDecodeError) as e:
        print(f"Cannot read file: {e}", file=sys.stderr)
        return EXIT_IO_ERROR
    logger.info("loaded %s (%d chars)", args.source, len(source))

    lexer = Lexer(source, args.source)
    lexer.tokenize()

    show_all = not (args.tokens or args.stats or args.symbols or args.errors)
    sections = []
    if show_all or args.tokens:
        sections.append(format_token_stream(lexer.tokens))
    if show_all or args.stats:
        sections.append(format_statistics(lexer))
    if show_all or args.symbols:
        sections.append(format_identifier_table(lexer.symbols))
    if show_all or args.errors:
        sections.append(format_error_report(lexer.errors))

    print(f"ZenLang Lexer - scanning: {args.source}")
    print("\n\n".join(sections))

    if args.strict and lexer.has_errors():
        return EXIT_LEXICAL_ERRORS
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
