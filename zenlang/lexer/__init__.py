"""
ZenLang Lexer Package

Implements a hand-coded lexical analyzer for the ZenLang teaching language.

Key Features:
- Priority-ordered rule table (comments, operators, words, literals)
- Bounded lookahead to tell real literals from integers
- Escape validation in text and character literals
- Error recovery: every problem is logged and scanning continues
- Exact 1-based line/column tracking across multi-line constructs
- Declarative regex reference scanner for cross-checking
"""

from .tokens import Token, TokenCategory, SourceLocation
from .errors import ErrorKind, ErrorLog, ErrorRecord, LexerError
from .rules import Rule, RULES, ScanAction, ScanResult
from .lexer import Lexer, ScanSession, tokenize, tokenize_file
from .reference import ReferenceScanner

__all__ = [
    "Lexer",
    "ScanSession",
    "tokenize",
    "tokenize_file",
    "Token",
    "TokenCategory",
    "SourceLocation",
    "ErrorKind",
    "ErrorLog",
    "ErrorRecord",
    "LexerError",
    "Rule",
    "RULES",
    "ScanAction",
    "ScanResult",
    "ReferenceScanner",
]
