"""
ZenLang Front End Package

A hand-coded lexical analyzer for the ZenLang teaching language.

Architecture:
    zenlang/
    ├── lexer/           # Tokens, rule table, scanner, reference scanner
    ├── analyzer/        # Identifier table
    ├── report.py        # Read-only report views
    └── cli.py           # `zlc` command
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .lexer import Lexer, Token, TokenCategory, tokenize, tokenize_file
from .analyzer import SymbolTable

__all__ = [
    # Core classes
    "Lexer",
    "Token",
    "TokenCategory",
    "SymbolTable",
    "tokenize",
    "tokenize_file",

    # Version info
    "__version__",
    "__license__",
]
