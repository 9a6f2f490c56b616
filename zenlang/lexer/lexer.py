"""
ZenLang Lexer - turns source text into a token stream

Single pass, left to right. At every position the rule table in rules.py
is tried in priority order; the winning handler returns a tagged result
and this module decides what happens to it (emit, keep as trivia, skip).
Malformed input is logged and scanning carries on, so one pass reports
every error in the file.
"""

from collections import Counter
from typing import List, NamedTuple, Optional, Tuple

from ..analyzer.symbol_table import SymbolTable
from ..utils.logging import get_logger
from .cursor import Cursor
from .errors import ErrorLog
from .rules import RULES, Rule, ScanAction, ScanResult, match_rule
from .tokens import Token, TokenCategory

logger = get_logger(__name__)


class ScanSession(NamedTuple):
    """Everything one scan produces."""
    tokens: List[Token]
    symbols: SymbolTable
    errors: ErrorLog


class Lexer:
    """
    ZenLang lexical analyzer.

    Each instance owns its cursor, token stream, symbol table and error
    log; run independent scans on independent instances.
    """

    def __init__(self, source: str, filename: str = "<unknown>",
                 rules: Tuple[Rule, ...] = RULES):
        """
        Initialize the lexer with source code.

        Args:
            source: Complete source text
            filename: Name of source file for error reporting
            rules: Ordered rule table; the last rule must always match
        """
        self.source = source
        self.filename = filename
        self.rules = rules
        self.cursor = Cursor(source, filename)
        self.tokens: List[Token] = []
        self.trivia: List[Token] = []
        self.skipped: List[Token] = []
        self.symbols = SymbolTable()
        self.errors = ErrorLog()
        self.category_counts: Counter = Counter()
        self.comment_count = 0

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire source code.

        Returns:
            List of tokens ending with the END_OF_FILE sentinel
        """
        self._reset()
        logger.debug("scanning %s (%d chars)", self.filename, len(self.source))

        while True:
            result = self.next_result()
            if result.action is ScanAction.DONE:
                break
            self._apply(result)

        self.tokens.append(Token(TokenCategory.END_OF_FILE, "", self.cursor.location()))

        logger.debug("scanned %s: %d tokens, %d errors, %d identifiers",
                     self.filename, len(self.tokens) - 1, self.errors.count(),
                     self.symbols.unique_count())
        return self.tokens

    def scan(self) -> ScanSession:
        """Tokenize and return the stream with its symbol table and error log."""
        tokens = self.tokenize()
        return ScanSession(tokens, self.symbols, self.errors)

    def next_result(self) -> ScanResult:
        """Run the first matching rule at the cursor."""
        if self.cursor.at_end():
            return ScanResult.done()
        rule = match_rule(self.cursor, self.rules)
        return rule.handler(self.cursor, self.errors)

    def _apply(self, result: ScanResult) -> None:
        token = result.token
        if result.action is ScanAction.SKIP:
            self.skipped.append(token)
        elif result.action is ScanAction.DISCARD:
            self.trivia.append(token)
            if token.category is not TokenCategory.SPACE:
                self.comment_count += 1
        else:
            self.tokens.append(token)
            self.category_counts[token.category] += 1
            if token.category is TokenCategory.IDENTIFIER:
                self.symbols.record(token.text, token.line, token.column)

    def _reset(self) -> None:
        self.cursor = Cursor(self.source, self.filename)
        self.tokens = []
        self.trivia = []
        self.skipped = []
        self.symbols = SymbolTable()
        self.errors = ErrorLog()
        self.category_counts = Counter()
        self.comment_count = 0

    def spans(self) -> List[Token]:
        """Emitted tokens, trivia and skipped characters in source order."""
        pieces = [t for t in self.tokens if t.category is not TokenCategory.END_OF_FILE]
        pieces.extend(self.trivia)
        pieces.extend(self.skipped)
        return sorted(pieces, key=lambda t: t.offset)

    @property
    def lines_processed(self) -> int:
        return self.cursor.line

    def has_errors(self) -> bool:
        """Check if lexer encountered any errors."""
        return self.errors.has_errors()


def tokenize(source: str, filename: str = "<string>", strict: bool = False) -> ScanSession:
    """
    Convenience function to scan a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting
        strict: Raise LexerError for the first lexical error

    Returns:
        ScanSession of (tokens, symbols, errors)
    """
    session = Lexer(source, filename).scan()
    if strict:
        session.errors.raise_first(filename)
    return session


def tokenize_file(filepath: str, strict: bool = False,
                  encoding: Optional[str] = "utf-8") -> ScanSession:
    """
    Convenience function to scan a source file.

    Raises:
        LexerError: If strict and the file has lexical errors
        OSError: If the file cannot be read
    """
    with open(filepath, "r", encoding=encoding) as f:
        source = f.read()

    return tokenize(source, filepath, strict=strict)
