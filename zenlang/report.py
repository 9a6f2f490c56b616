"""
Read-only reports over a finished scan.

Every function here takes the lexer's output structures and returns data
or text; nothing is mutated and nothing is printed.
"""

from collections import Counter
from typing import Dict, Iterable, List

from .analyzer.symbol_table import SymbolTable
from .lexer.errors import ErrorLog
from .lexer.lexer import Lexer
from .lexer.tokens import Token, TokenCategory

WIDTH = 82
TABLE_WIDTH = 88


def _banner(title: str, width: int = WIDTH) -> List[str]:
    return ["=" * width, title, "=" * width]


def format_token_stream(tokens: Iterable[Token]) -> str:
    """Canonical rendering of every token except END_OF_FILE."""
    lines = _banner("TOKEN STREAM")
    lines.extend(str(t) for t in tokens if t.category is not TokenCategory.END_OF_FILE)
    lines.append("=" * WIDTH)
    return "\n".join(lines)


def category_breakdown(tokens: Iterable[Token]) -> Dict[TokenCategory, int]:
    """Per-category frequency of emitted tokens, END_OF_FILE excluded."""
    counts = Counter(t.category for t in tokens if t.category is not TokenCategory.END_OF_FILE)
    return dict(sorted(counts.items(), key=lambda item: item[0].name))


def format_statistics(lexer: Lexer) -> str:
    breakdown = category_breakdown(lexer.tokens)
    lines = _banner("SCAN STATISTICS")
    lines.append(f"  Total tokens emitted : {sum(breakdown.values())}")
    lines.append(f"  Lines processed      : {lexer.lines_processed}")
    lines.append(f"  Comments removed     : {lexer.comment_count}")
    lines.append(f"  Lexical errors       : {lexer.errors.count()}")
    lines.append("")
    lines.append("  Breakdown by category:")
    lines.append("  " + "-" * 40)
    for category, count in breakdown.items():
        lines.append(f"    {category.name:<22} : {count}")
    lines.append("=" * WIDTH)
    return "\n".join(lines)


def format_identifier_table(symbols: SymbolTable) -> str:
    lines = _banner("IDENTIFIER TABLE", TABLE_WIDTH)
    if not len(symbols):
        lines.append("  (no identifiers found)")
    else:
        lines.append(f"{'Name':<22} | {'Type':<12} | {'First Occurrence':<18} | Count")
        lines.append("-" * TABLE_WIDTH)
        lines.extend(f"  {entry}" for entry in symbols)
        lines.append("-" * TABLE_WIDTH)
        lines.append(f"  Unique identifiers: {symbols.unique_count()}")
    lines.append("=" * TABLE_WIDTH)
    return "\n".join(lines)


def format_error_report(errors: ErrorLog) -> str:
    if not errors.has_errors():
        return "No lexical errors detected."

    lines = _banner(f"LEXICAL ERROR REPORT  ({errors.count()} error(s))")
    for index, message in enumerate(errors.all_messages(), start=1):
        lines.append(f"  {index:2d}. {message}")
    lines.append("=" * WIDTH)
    return "\n".join(lines)
