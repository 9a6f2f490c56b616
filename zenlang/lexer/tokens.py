"""
Token definitions for the ZenLang lexer.

This module defines the closed set of token categories and the lexeme
tables the scanner matches against:
- Keywords and boolean literals (lowercase reserved words)
- Two-character and single-character operators
- Delimiters and comment markers
- Scanner limits (identifier length, fractional digits)

Tokens keep their literal text verbatim; no numeric or string values are
computed here.
"""

from enum import Enum, auto
from dataclasses import dataclass


class TokenCategory(Enum):
    """
    Enumeration of all lexical classes in ZenLang.

    LINE_COMMENT, BLOCK_COMMENT and SPACE are produced by the scanner but
    discarded from the token stream.
    """

    # ========================================================================
    # Words
    # ========================================================================
    KEYWORD = auto()                # start, loop, return, ...
    IDENTIFIER = auto()             # Count, Total_2

    # ========================================================================
    # Literals
    # ========================================================================
    INT_LITERAL = auto()            # 42, -7
    REAL_LITERAL = auto()           # 3.14, +2.5e-3
    TEXT_LITERAL = auto()           # "hello\n"
    CHAR_LITERAL = auto()           # 'a', '\t'
    BOOL_LITERAL = auto()           # true, false

    # ========================================================================
    # Operators
    # ========================================================================
    ARITH_OP = auto()               # + - * / % **
    RELATIONAL_OP = auto()          # < > <= >= == !=
    LOGICAL_OP = auto()             # && || !
    ASSIGN_OP = auto()              # = += -= *= /= %=
    INC_OP = auto()                 # ++
    DEC_OP = auto()                 # --

    # ========================================================================
    # Punctuation
    # ========================================================================
    DELIMITER = auto()              # ( ) { } [ ] , ; :

    # ========================================================================
    # Discarded
    # ========================================================================
    LINE_COMMENT = auto()           # ## ...
    BLOCK_COMMENT = auto()          # #* ... *#
    SPACE = auto()                  # runs of space/tab/CR/LF

    # ========================================================================
    # Error and Sentinel Tokens
    # ========================================================================
    INVALID = auto()                # Malformed or skipped input
    END_OF_FILE = auto()            # Sentinel, appended once per scan


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source code.

    Line and column are 1-based; offset is the 0-based index into the
    source string.
    """
    filename: str
    line: int
    column: int
    offset: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token in the ZenLang language.

    Carries the category, the exact slice of source text and the location
    where the token starts.
    """
    category: TokenCategory
    text: str                       # Raw text from source
    location: SourceLocation

    @property
    def line(self) -> int:
        return self.location.line

    @property
    def column(self) -> int:
        return self.location.column

    @property
    def offset(self) -> int:
        return self.location.offset

    def __str__(self) -> str:
        return (f'<{self.category.name}, "{self.text}", '
                f'Line: {self.line}, Col: {self.column}>')

    def __repr__(self) -> str:
        return f"Token({self.category.name}, {self.text!r}, {self.location!r})"

    @property
    def is_literal(self) -> bool:
        """Check if this token is a literal value."""
        return self.category in LITERAL_CATEGORIES

    @property
    def is_operator(self) -> bool:
        """Check if this token is an operator."""
        return self.category in OPERATOR_CATEGORIES

    @property
    def is_trivia(self) -> bool:
        """Check if this token is a comment or whitespace span."""
        return self.category in DISCARDED_CATEGORIES


LITERAL_CATEGORIES = frozenset({
    TokenCategory.INT_LITERAL,
    TokenCategory.REAL_LITERAL,
    TokenCategory.TEXT_LITERAL,
    TokenCategory.CHAR_LITERAL,
    TokenCategory.BOOL_LITERAL,
})

OPERATOR_CATEGORIES = frozenset({
    TokenCategory.ARITH_OP,
    TokenCategory.RELATIONAL_OP,
    TokenCategory.LOGICAL_OP,
    TokenCategory.ASSIGN_OP,
    TokenCategory.INC_OP,
    TokenCategory.DEC_OP,
})

DISCARDED_CATEGORIES = frozenset({
    TokenCategory.LINE_COMMENT,
    TokenCategory.BLOCK_COMMENT,
    TokenCategory.SPACE,
})


# Lookup tables for token recognition

KEYWORDS = frozenset({
    "start", "finish", "loop", "condition", "declare", "output",
    "input", "function", "return", "break", "continue", "else",
})

BOOLEANS = frozenset({"true", "false"})

TWO_CHAR_OPERATORS = {
    # Arithmetic
    "**": TokenCategory.ARITH_OP,

    # Comparison
    "==": TokenCategory.RELATIONAL_OP,
    "!=": TokenCategory.RELATIONAL_OP,
    "<=": TokenCategory.RELATIONAL_OP,
    ">=": TokenCategory.RELATIONAL_OP,

    # Logical
    "&&": TokenCategory.LOGICAL_OP,
    "||": TokenCategory.LOGICAL_OP,

    # Increment / decrement
    "++": TokenCategory.INC_OP,
    "--": TokenCategory.DEC_OP,

    # Compound assignment
    "+=": TokenCategory.ASSIGN_OP,
    "-=": TokenCategory.ASSIGN_OP,
    "*=": TokenCategory.ASSIGN_OP,
    "/=": TokenCategory.ASSIGN_OP,
    "%=": TokenCategory.ASSIGN_OP,
}

SINGLE_CHAR_OPERATORS = {
    "+": TokenCategory.ARITH_OP,
    "-": TokenCategory.ARITH_OP,
    "*": TokenCategory.ARITH_OP,
    "/": TokenCategory.ARITH_OP,
    "%": TokenCategory.ARITH_OP,
    "<": TokenCategory.RELATIONAL_OP,
    ">": TokenCategory.RELATIONAL_OP,
    "!": TokenCategory.LOGICAL_OP,
    "=": TokenCategory.ASSIGN_OP,
}

DELIMITERS = frozenset("(){}[],;:")

WHITESPACE = frozenset(" \t\r\n")

BLOCK_COMMENT_OPEN = "#*"
BLOCK_COMMENT_CLOSE = "*#"
LINE_COMMENT_MARKER = "##"

# Escape letters accepted after a backslash, per literal kind
TEXT_ESCAPES = frozenset('"\\ntr')
CHAR_ESCAPES = frozenset("'\\ntr")

# Scanner limits
MAX_IDENTIFIER_LENGTH = 31          # 1 uppercase letter + 30 continuation chars
MAX_FRACTION_DIGITS = 6
MAX_CHAR_LITERAL_SCAN = 3           # logical characters read before a same-line closing quote is required


def is_upper(char: str) -> bool:
    return "A" <= char <= "Z"


def is_lower(char: str) -> bool:
    return "a" <= char <= "z"


def is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def is_identifier_continue(char: str) -> bool:
    """Characters allowed after the leading uppercase letter of an identifier."""
    return is_lower(char) or is_digit(char) or char == "_"


def is_word_char(char: str) -> bool:
    """Characters that break a keyword's word boundary."""
    return is_upper(char) or is_lower(char) or is_digit(char) or char == "_"
