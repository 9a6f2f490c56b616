"""
Error handling for the ZenLang lexer.

Lexical errors are collected as structured records rather than raised, so
a single pass reports every problem in the file. Each record carries its
kind, 1-based position, the (possibly partial) lexeme and an explanation.
"""

from typing import Optional, List, Tuple
from dataclasses import dataclass
from enum import Enum

from ..utils.logging import get_logger
from .tokens import SourceLocation, KEYWORDS, BOOLEANS

logger = get_logger(__name__)


class ErrorKind(Enum):
    """Kinds of lexical errors, with their stable diagnostic codes."""
    INVALID_CHAR = "L001"
    UNTERMINATED_STRING = "L002"
    BAD_NUMBER = "L003"
    BAD_IDENTIFIER = "L004"
    UNTERMINATED_CHAR = "L005"
    BAD_ESCAPE = "L006"
    UNTERMINATED_COMMENT = "L007"

    @property
    def code(self) -> str:
        return self.value


# Short descriptions for each error code
ERROR_CODES = {
    "L001": "Invalid character",
    "L002": "Unterminated string literal",
    "L003": "Invalid numeric literal",
    "L004": "Identifier too long",
    "L005": "Unterminated character literal",
    "L006": "Invalid escape sequence",
    "L007": "Unterminated block comment",
}


@dataclass(frozen=True)
class ErrorRecord:
    """A single lexical error. Never mutated once recorded."""
    kind: ErrorKind
    line: int
    column: int
    lexeme: str
    detail: str
    suggestions: Tuple[str, ...] = ()

    def __str__(self) -> str:
        result = (f"ERROR [{self.kind.name}] Line: {self.line}, Col: {self.column}  "
                  f"lexeme='{self.lexeme}'  -> {self.detail}")
        if self.suggestions:
            result += f" (did you mean: {', '.join(self.suggestions)}?)"
        return result

    @property
    def position(self) -> Tuple[int, int]:
        return (self.line, self.column)


class LexerError(Exception):
    """
    Raised by strict callers that want the first lexical error as an exception.

    The scanner itself never raises this; see ErrorLog.raise_first().
    """

    def __init__(self, record: ErrorRecord, filename: str = "<unknown>"):
        super().__init__(str(record))
        self.record = record
        self.location = SourceLocation(filename, record.line, record.column, -1)

    @property
    def code(self) -> str:
        return self.record.kind.code

    def __str__(self) -> str:
        return f"{self.location}: {self.record}"


class ErrorRecovery:
    """
    Utilities used while recovering from lexical errors.
    """

    @staticmethod
    def suggest_keyword_corrections(invalid_word: str) -> List[str]:
        """Suggest reserved words within edit distance 2, closest first."""
        candidates = []
        for word in sorted(KEYWORDS | BOOLEANS):
            distance = ErrorRecovery._edit_distance(invalid_word, word)
            if distance <= 2:
                candidates.append((distance, word))

        return [word for _, word in sorted(candidates)][:3]

    @staticmethod
    def _edit_distance(s1: str, s2: str) -> int:
        """Calculate Levenshtein distance between two strings."""
        if len(s1) < len(s2):
            return ErrorRecovery._edit_distance(s2, s1)

        if len(s2) == 0:
            return len(s1)

        previous_row = list(range(len(s2) + 1))
        for i, c1 in enumerate(s1):
            current_row = [i + 1]
            for j, c2 in enumerate(s2):
                insertions = previous_row[j + 1] + 1
                deletions = current_row[j] + 1
                substitutions = previous_row[j] + (c1 != c2)
                current_row.append(min(insertions, deletions, substitutions))
            previous_row = current_row

        return previous_row[-1]


class ErrorLog:
    """
    Ordered, append-only collection of lexical errors for one scan session.
    """

    def __init__(self):
        self._records: List[ErrorRecord] = []

    # Typed helpers, one per error kind

    def bad_char(self, char: str, line: int, col: int,
                 suggestions: Optional[List[str]] = None) -> ErrorRecord:
        if char.isprintable():
            detail = f"Character '{char}' is not part of the ZenLang alphabet"
        else:
            detail = f"Non-printable character (U+{ord(char):04X}) is not allowed"
        return self.record(ErrorKind.INVALID_CHAR, line, col, char, detail, suggestions)

    def bad_number(self, lexeme: str, line: int, col: int, reason: str) -> ErrorRecord:
        return self.record(ErrorKind.BAD_NUMBER, line, col, lexeme, reason)

    def bad_identifier(self, lexeme: str, line: int, col: int, reason: str) -> ErrorRecord:
        return self.record(ErrorKind.BAD_IDENTIFIER, line, col, lexeme, reason)

    def unterminated_string(self, partial: str, line: int, col: int) -> ErrorRecord:
        return self.record(ErrorKind.UNTERMINATED_STRING, line, col, partial,
                           "String literal opened with '\"' but never closed")

    def unterminated_char(self, partial: str, line: int, col: int,
                          reason: Optional[str] = None) -> ErrorRecord:
        return self.record(ErrorKind.UNTERMINATED_CHAR, line, col, partial,
                           reason or "Character literal opened with ''' but never closed")

    def unterminated_comment(self, line: int, col: int) -> ErrorRecord:
        return self.record(ErrorKind.UNTERMINATED_COMMENT, line, col, "#*",
                           "Block comment opened with '#*' but '*#' was never found")

    def bad_escape(self, sequence: str, line: int, col: int) -> ErrorRecord:
        return self.record(ErrorKind.BAD_ESCAPE, line, col, sequence,
                           "Unrecognised escape sequence. Valid: \\n \\t \\r \\\" \\' \\\\")

    def record(self, kind: ErrorKind, line: int, col: int, lexeme: str, detail: str,
               suggestions: Optional[List[str]] = None) -> ErrorRecord:
        """General-purpose entry point; appends and returns the new record."""
        entry = ErrorRecord(kind, line, col, lexeme, detail, tuple(suggestions or ()))
        self._records.append(entry)
        logger.debug("lexical error %s at %d:%d: %s", kind.name, line, col, detail)
        return entry

    # Queries

    def has_errors(self) -> bool:
        return len(self._records) > 0

    def count(self) -> int:
        return len(self._records)

    def all_messages(self) -> List[str]:
        """All error messages in recording order."""
        return [str(r) for r in self._records]

    @property
    def records(self) -> Tuple[ErrorRecord, ...]:
        return tuple(self._records)

    def by_kind(self, kind: ErrorKind) -> List[ErrorRecord]:
        return [r for r in self._records if r.kind is kind]

    def raise_first(self, filename: str = "<unknown>") -> None:
        """Raise LexerError for the first recorded error, if any."""
        if self._records:
            raise LexerError(self._records[0], filename)

    def reset(self) -> None:
        """Clears all recorded errors."""
        self._records.clear()

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self):
        return iter(self._records)
