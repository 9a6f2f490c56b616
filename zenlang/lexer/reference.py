"""
Reference scanner for ZenLang, driven by a declarative pattern table.

The grammar is written down once as an ordered list of (category, regex)
specifications and matched with `re` at each position. It shares no
scanning code with the hand-coded Lexer, which makes it useful as a
cross-check: on well-formed input both must produce identical streams.

Recovery is deliberately simple. A character no pattern accepts becomes a
one-character INVALID token. No symbol table or error log is kept.
"""

import re
from typing import List, Optional, Tuple

from .tokens import Token, TokenCategory, SourceLocation, KEYWORDS, DISCARDED_CATEGORIES

_WORD_END = r"(?![A-Za-z0-9_])"

# (category, pattern) in priority order
TOKEN_SPECIFICATIONS: List[Tuple[TokenCategory, str]] = [
    (TokenCategory.BLOCK_COMMENT, r"#\*.*?\*#"),
    (TokenCategory.LINE_COMMENT, r"##[^\n]*"),

    (TokenCategory.ARITH_OP, r"\*\*"),
    (TokenCategory.RELATIONAL_OP, r"==|!=|<=|>="),
    (TokenCategory.LOGICAL_OP, r"&&|\|\|"),
    (TokenCategory.INC_OP, r"\+\+"),
    (TokenCategory.DEC_OP, r"--"),
    (TokenCategory.ASSIGN_OP, r"[-+*/%]="),

    (TokenCategory.KEYWORD, "(?:" + "|".join(sorted(KEYWORDS)) + ")" + _WORD_END),
    (TokenCategory.BOOL_LITERAL, r"(?:true|false)" + _WORD_END),
    (TokenCategory.IDENTIFIER, r"[A-Z][a-z0-9_]*"),

    (TokenCategory.REAL_LITERAL, r"[+-]?[0-9]+\.[0-9]{1,6}(?:[eE][+-]?[0-9]+)?"),
    (TokenCategory.INT_LITERAL, r"[+-]?[0-9]+"),
    (TokenCategory.TEXT_LITERAL, r'"(?:[^"\\\n]|\\["\\ntr])*"'),
    (TokenCategory.CHAR_LITERAL, r"'(?:[^'\\\n]|\\['\\ntr])'"),

    (TokenCategory.ARITH_OP, r"[-+*/%]"),
    (TokenCategory.RELATIONAL_OP, r"[<>]"),
    (TokenCategory.LOGICAL_OP, r"!"),
    (TokenCategory.ASSIGN_OP, r"="),
    (TokenCategory.DELIMITER, r"[(){}\[\],;:]"),

    (TokenCategory.SPACE, r"[ \t\r\n]+"),
]


class ReferenceScanner:
    """Table-driven scanner used as an oracle for the hand-coded Lexer."""

    def __init__(self, source: str, filename: str = "<unknown>"):
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1

        self._compile_patterns()

    def _compile_patterns(self):
        """Compile the specification table once per scanner."""
        self.compiled_rules = [
            (category, re.compile(pattern, re.DOTALL))
            for category, pattern in TOKEN_SPECIFICATIONS
        ]

    def tokenize(self) -> List[Token]:
        """Scan the whole source; trivia is dropped, END_OF_FILE appended."""
        self.pos = 0
        self.line = 1
        self.column = 1
        tokens: List[Token] = []

        while self.pos < len(self.source):
            token = self._next_token()
            if token.category not in DISCARDED_CATEGORIES:
                tokens.append(token)

        tokens.append(Token(TokenCategory.END_OF_FILE, "", self._location()))
        return tokens

    def _next_token(self) -> Token:
        location = self._location()
        for category, pattern in self.compiled_rules:
            match = pattern.match(self.source, self.pos)
            if match:
                lexeme = match.group(0)
                break
        else:
            category, lexeme = TokenCategory.INVALID, self.source[self.pos]

        self._advance_over(lexeme)
        return Token(category, lexeme, location)

    def _location(self) -> SourceLocation:
        return SourceLocation(self.filename, self.line, self.column, self.pos)

    def _advance_over(self, lexeme: str) -> None:
        newlines = lexeme.count("\n")
        if newlines:
            self.line += newlines
            self.column = len(lexeme) - lexeme.rfind("\n")
        else:
            self.column += len(lexeme)
        self.pos += len(lexeme)


def reference_tokenize(source: str, filename: str = "<string>") -> List[Token]:
    """Convenience wrapper around ReferenceScanner."""
    return ReferenceScanner(source, filename).tokenize()


def first_divergence(expected: List[Token], actual: List[Token]) -> Optional[int]:
    """Index of the first token that differs in category, text or position."""
    for index, (left, right) in enumerate(zip(expected, actual)):
        if (left.category, left.text, left.line, left.column) != \
                (right.category, right.text, right.line, right.column):
            return index
    if len(expected) != len(actual):
        return min(len(expected), len(actual))
    return None
