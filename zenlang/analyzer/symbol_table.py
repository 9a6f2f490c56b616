"""
Identifier table for ZenLang.

Tracks every identifier seen during scanning: where it first appeared and
how many times it occurs. The declared type is a placeholder that the
semantic phase fills in later.
"""

from typing import Dict, Iterator, List, Optional
from dataclasses import dataclass

UNKNOWN_TYPE = "unknown"


@dataclass
class SymbolEntry:
    """Metadata for a single identifier."""
    name: str
    first_line: int
    first_col: int
    declared_type: str = UNKNOWN_TYPE
    occurrences: int = 1

    def bump(self) -> None:
        self.occurrences += 1

    def __str__(self) -> str:
        return (f"{self.name:<22} | {self.declared_type:<12} | "
                f"Line: {self.first_line:<4} Col: {self.first_col:<4} | "
                f"Count: {self.occurrences}")


class SymbolTable:
    """
    Mapping from identifier name to its first occurrence and running count.

    Entries are kept in discovery order and are never removed.
    """

    def __init__(self):
        self._entries: Dict[str, SymbolEntry] = {}

    def record(self, name: str, line: int, col: int) -> SymbolEntry:
        """
        Records an identifier occurrence.

        A new name is added with its position; a known name only has its
        count incremented.
        """
        entry = self._entries.get(name)
        if entry is None:
            entry = SymbolEntry(name, line, col)
            self._entries[name] = entry
        else:
            entry.bump()
        return entry

    def has(self, name: str) -> bool:
        return name in self._entries

    def lookup(self, name: str) -> Optional[SymbolEntry]:
        return self._entries.get(name)

    def occurrence_count(self, name: str) -> int:
        """How many times the name has appeared (0 if never seen)."""
        entry = self._entries.get(name)
        return entry.occurrences if entry is not None else 0

    def unique_count(self) -> int:
        return len(self._entries)

    def by_frequency(self) -> List[SymbolEntry]:
        """Entries by descending count; ties keep discovery order."""
        return sorted(self._entries.values(), key=lambda e: e.occurrences, reverse=True)

    def set_type(self, name: str, declared_type: str) -> None:
        """Attach a declared type to a known identifier."""
        entry = self._entries.get(name)
        if entry is None:
            raise KeyError(f"Identifier '{name}' has not been recorded")
        entry.declared_type = declared_type

    def __contains__(self, name: str) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[SymbolEntry]:
        return iter(self._entries.values())
