"""
ZenLang Analyzer Package

Holds the identifier table built during scanning. Type information is
left as a placeholder for a later semantic phase.
"""

from .symbol_table import SymbolTable, SymbolEntry, UNKNOWN_TYPE

__all__ = [
    "SymbolTable",
    "SymbolEntry",
    "UNKNOWN_TYPE",
]
