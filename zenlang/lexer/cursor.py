"""
Cursor over a fully-loaded source buffer.

Owns the read position and the 1-based line/column counters. Each Lexer
creates its own Cursor, so independent scans never share position state.
"""

from .tokens import SourceLocation

EOF_CHAR = "\0"


class Cursor:
    """Read position into the source with line/column bookkeeping."""

    def __init__(self, source: str, filename: str = "<unknown>"):
        self.source = source
        self.filename = filename
        self.length = len(source)
        self.pos = 0
        self.line = 1
        self.column = 1

    def at_end(self) -> bool:
        return self.pos >= self.length

    def peek(self, offset: int = 0) -> str:
        """Character `offset` positions ahead (0 = current), or EOF_CHAR."""
        index = self.pos + offset
        if index < self.length:
            return self.source[index]
        return EOF_CHAR

    def startswith(self, text: str) -> bool:
        return self.source.startswith(text, self.pos)

    def advance(self) -> str:
        """Consume and return the current character, updating line/column."""
        char = self.source[self.pos]
        self.pos += 1
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return char

    def advance_by(self, count: int) -> None:
        for _ in range(count):
            if self.pos < self.length:
                self.advance()

    def location(self) -> SourceLocation:
        return SourceLocation(self.filename, self.line, self.column, self.pos)

    def text_from(self, start: SourceLocation) -> str:
        """Source slice from `start` up to the current position."""
        return self.source[start.offset:self.pos]

    def __repr__(self) -> str:
        return f"Cursor(pos={self.pos}, line={self.line}, column={self.column})"
