"""
Priority-ordered scanning rules for the ZenLang lexer.

Each rule pairs a predicate (does the rule apply at the cursor?) with a
handler that consumes the lexeme and returns a tagged ScanResult. The
Lexer tries RULES in order and the first matching rule wins, which is how
overlapping classes are resolved: comments before operators, two-character
operators before single ones, keywords before the lowercase fallback.

Handlers never return None and never raise on malformed input. They log to
the ErrorLog and still consume at least one character.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, List, Optional, Tuple

from .cursor import Cursor
from .errors import ErrorLog, ErrorRecovery
from .tokens import (
    Token, TokenCategory, SourceLocation,
    KEYWORDS, BOOLEANS, TWO_CHAR_OPERATORS, SINGLE_CHAR_OPERATORS,
    DELIMITERS, WHITESPACE, TEXT_ESCAPES, CHAR_ESCAPES,
    BLOCK_COMMENT_OPEN, BLOCK_COMMENT_CLOSE, LINE_COMMENT_MARKER,
    MAX_IDENTIFIER_LENGTH, MAX_FRACTION_DIGITS, MAX_CHAR_LITERAL_SCAN,
    is_upper, is_lower, is_digit, is_identifier_continue, is_word_char,
)


class ScanAction(Enum):
    """What the driver loop should do with a handler's result."""
    EMIT = auto()       # append the token to the stream
    DISCARD = auto()    # comment or whitespace span, kept as trivia
    SKIP = auto()       # one character dropped after an INVALID_CHAR
    DONE = auto()       # end of input


@dataclass(frozen=True)
class ScanResult:
    action: ScanAction
    token: Optional[Token] = None

    @classmethod
    def emit(cls, token: Token) -> "ScanResult":
        return cls(ScanAction.EMIT, token)

    @classmethod
    def discard(cls, token: Token) -> "ScanResult":
        return cls(ScanAction.DISCARD, token)

    @classmethod
    def skip(cls, token: Token) -> "ScanResult":
        return cls(ScanAction.SKIP, token)

    @classmethod
    def done(cls) -> "ScanResult":
        return cls(ScanAction.DONE)


Predicate = Callable[[Cursor], bool]
Handler = Callable[[Cursor, ErrorLog], ScanResult]


@dataclass(frozen=True)
class Rule:
    name: str
    matches: Predicate
    handler: Handler


def _make_token(cursor: Cursor, category: TokenCategory, start: SourceLocation) -> Token:
    return Token(category, cursor.text_from(start), start)


def _lowercase_run(cursor: Cursor) -> str:
    end = cursor.pos
    while end < cursor.length and is_lower(cursor.source[end]):
        end += 1
    return cursor.source[cursor.pos:end]


def _word_ahead(cursor: Cursor) -> Optional[str]:
    """
    The lowercase word at the cursor, if it ends on a word boundary.

    Returns None when the run is followed by an uppercase letter, digit
    or underscore, so a reserved word is never matched as a prefix.
    """
    word = _lowercase_run(cursor)
    if not word or is_word_char(cursor.peek(len(word))):
        return None
    return word


# ============================================================================
# Predicates
# ============================================================================

def _starts_block_comment(cursor: Cursor) -> bool:
    return cursor.startswith(BLOCK_COMMENT_OPEN)


def _starts_line_comment(cursor: Cursor) -> bool:
    return cursor.startswith(LINE_COMMENT_MARKER)


def _starts_two_char_op(cursor: Cursor) -> bool:
    return cursor.source[cursor.pos:cursor.pos + 2] in TWO_CHAR_OPERATORS


def _starts_keyword(cursor: Cursor) -> bool:
    return is_lower(cursor.peek()) and _word_ahead(cursor) in KEYWORDS


def _starts_boolean(cursor: Cursor) -> bool:
    return is_lower(cursor.peek()) and _word_ahead(cursor) in BOOLEANS


def _starts_identifier(cursor: Cursor) -> bool:
    return is_upper(cursor.peek())


def _starts_number(cursor: Cursor) -> bool:
    char = cursor.peek()
    return is_digit(char) or (char in "+-" and is_digit(cursor.peek(1)))


def _starts_real(cursor: Cursor) -> bool:
    """Peek past the optional sign and digit run for a decimal point."""
    if not _starts_number(cursor):
        return False
    probe = 1 if cursor.peek() in "+-" else 0
    while is_digit(cursor.peek(probe)):
        probe += 1
    return cursor.peek(probe) == "."


def _starts_text(cursor: Cursor) -> bool:
    return cursor.peek() == '"'


def _starts_char(cursor: Cursor) -> bool:
    return cursor.peek() == "'"


def _starts_single_op(cursor: Cursor) -> bool:
    return cursor.peek() in SINGLE_CHAR_OPERATORS


def _starts_delimiter(cursor: Cursor) -> bool:
    return cursor.peek() in DELIMITERS


def _starts_whitespace(cursor: Cursor) -> bool:
    return cursor.peek() in WHITESPACE


def _always(cursor: Cursor) -> bool:
    return True


# ============================================================================
# Handlers
# ============================================================================

def read_block_comment(cursor: Cursor, errors: ErrorLog) -> ScanResult:
    """Reads a block comment: #* ... *#"""
    start = cursor.location()
    cursor.advance_by(len(BLOCK_COMMENT_OPEN))

    closed = False
    while not cursor.at_end():
        if cursor.startswith(BLOCK_COMMENT_CLOSE):
            cursor.advance_by(len(BLOCK_COMMENT_CLOSE))
            closed = True
            break
        cursor.advance()

    if not closed:
        errors.unterminated_comment(start.line, start.column)

    return ScanResult.discard(_make_token(cursor, TokenCategory.BLOCK_COMMENT, start))


def read_line_comment(cursor: Cursor, errors: ErrorLog) -> ScanResult:
    """Reads a line comment up to, not including, the newline."""
    start = cursor.location()
    cursor.advance_by(len(LINE_COMMENT_MARKER))
    while not cursor.at_end() and cursor.peek() != "\n":
        cursor.advance()
    return ScanResult.discard(_make_token(cursor, TokenCategory.LINE_COMMENT, start))


def read_two_char_op(cursor: Cursor, errors: ErrorLog) -> ScanResult:
    start = cursor.location()
    category = TWO_CHAR_OPERATORS[cursor.source[cursor.pos:cursor.pos + 2]]
    cursor.advance_by(2)
    return ScanResult.emit(_make_token(cursor, category, start))


def _read_word(cursor: Cursor, category: TokenCategory) -> ScanResult:
    start = cursor.location()
    cursor.advance_by(len(_lowercase_run(cursor)))
    return ScanResult.emit(_make_token(cursor, category, start))


def read_keyword(cursor: Cursor, errors: ErrorLog) -> ScanResult:
    return _read_word(cursor, TokenCategory.KEYWORD)


def read_boolean(cursor: Cursor, errors: ErrorLog) -> ScanResult:
    return _read_word(cursor, TokenCategory.BOOL_LITERAL)


def read_identifier(cursor: Cursor, errors: ErrorLog) -> ScanResult:
    """
    Reads an identifier: [A-Z][a-z0-9_]*

    Runs longer than MAX_IDENTIFIER_LENGTH are consumed in full and still
    emitted as IDENTIFIER, with a BAD_IDENTIFIER error.
    """
    start = cursor.location()
    cursor.advance()
    while not cursor.at_end() and is_identifier_continue(cursor.peek()):
        cursor.advance()

    name = cursor.text_from(start)
    if len(name) > MAX_IDENTIFIER_LENGTH:
        excess = len(name) - MAX_IDENTIFIER_LENGTH
        errors.bad_identifier(
            name, start.line, start.column,
            f"Identifier length {len(name)} exceeds the {MAX_IDENTIFIER_LENGTH}-character "
            f"limit by {excess}"
        )

    return ScanResult.emit(_make_token(cursor, TokenCategory.IDENTIFIER, start))


def _consume_sign(cursor: Cursor) -> None:
    if cursor.peek() in "+-":
        cursor.advance()


def _consume_digits(cursor: Cursor) -> int:
    count = 0
    while is_digit(cursor.peek()):
        cursor.advance()
        count += 1
    return count


def read_real(cursor: Cursor, errors: ErrorLog) -> ScanResult:
    """
    Reads a real literal: [+-]?[0-9]+\\.[0-9]{1,6}([eE][+-]?[0-9]+)?

    Each malformed part is its own BAD_NUMBER record; the lexeme read so far
    is always emitted so the stream stays in step with the source.
    """
    start = cursor.location()
    _consume_sign(cursor)
    _consume_digits(cursor)

    if cursor.peek() != ".":
        errors.bad_number(cursor.text_from(start), start.line, start.column,
                          "Decimal point expected")
        return ScanResult.emit(_make_token(cursor, TokenCategory.INVALID, start))
    cursor.advance()

    fraction_digits = _consume_digits(cursor)
    if fraction_digits == 0:
        errors.bad_number(cursor.text_from(start), start.line, start.column,
                          "At least one digit required after the decimal point")
    elif fraction_digits > MAX_FRACTION_DIGITS:
        errors.bad_number(cursor.text_from(start), start.line, start.column,
                          f"Too many fractional digits (max {MAX_FRACTION_DIGITS}, "
                          f"found {fraction_digits})")

    if cursor.peek() in ("e", "E"):
        cursor.advance()
        _consume_sign(cursor)
        if _consume_digits(cursor) == 0:
            errors.bad_number(cursor.text_from(start), start.line, start.column,
                              "Digit(s) required after exponent marker")

    return ScanResult.emit(_make_token(cursor, TokenCategory.REAL_LITERAL, start))


def read_integer(cursor: Cursor, errors: ErrorLog) -> ScanResult:
    """Reads an integer literal: [+-]?[0-9]+"""
    start = cursor.location()
    _consume_sign(cursor)

    if _consume_digits(cursor) == 0:
        if cursor.pos == start.offset:
            # nothing to read; take one character so the scan moves on
            cursor.advance()
        errors.bad_number(cursor.text_from(start), start.line, start.column,
                          "Digit expected after sign")
        return ScanResult.emit(_make_token(cursor, TokenCategory.INVALID, start))

    return ScanResult.emit(_make_token(cursor, TokenCategory.INT_LITERAL, start))


def _read_escape(cursor: Cursor, valid: frozenset,
                 pending: List[Tuple[str, SourceLocation]]) -> None:
    """
    Consume a backslash and the character after it.

    A newline or end of input after the backslash is left for the caller,
    which reports the literal as unterminated.
    """
    location = cursor.location()
    cursor.advance()
    if cursor.at_end() or cursor.peek() == "\n":
        return
    letter = cursor.advance()
    if letter not in valid:
        pending.append(("\\" + letter, location))


def read_text(cursor: Cursor, errors: ErrorLog) -> ScanResult:
    """Reads a text literal: "([^"\\\\\\n]|\\\\["\\\\ntr])*" """
    start = cursor.location()
    cursor.advance()

    pending: List[Tuple[str, SourceLocation]] = []
    closed = False
    while not cursor.at_end():
        char = cursor.peek()
        if char == "\n":
            break
        if char == '"':
            cursor.advance()
            closed = True
            break
        if char == "\\":
            _read_escape(cursor, TEXT_ESCAPES, pending)
        else:
            cursor.advance()

    # opening-quote error first so the log stays in source order
    if not closed:
        errors.unterminated_string(cursor.text_from(start), start.line, start.column)
    for sequence, location in pending:
        errors.bad_escape(sequence, location.line, location.column)

    return ScanResult.emit(_make_token(cursor, TokenCategory.TEXT_LITERAL, start))


def _closing_quote_ahead(cursor: Cursor) -> bool:
    """True if an unescaped ' follows on the current line."""
    index = cursor.pos
    while index < cursor.length:
        char = cursor.source[index]
        if char == "\n":
            return False
        if char == "'":
            return True
        if char == "\\" and cursor.peek(index - cursor.pos + 1) not in ("\n", "\0"):
            index += 2
        else:
            index += 1
    return False


def read_char(cursor: Cursor, errors: ErrorLog) -> ScanResult:
    """
    Reads a character literal: '([^'\\\\\\n]|\\\\['\\\\ntr])'

    After MAX_CHAR_LITERAL_SCAN logical characters the scan continues only
    if a closing quote is still ahead on the same line, so an overlong
    literal becomes one token. Anything other than exactly one logical
    character is UNTERMINATED_CHAR.
    """
    start = cursor.location()
    cursor.advance()

    pending: List[Tuple[str, SourceLocation]] = []
    closed = False
    bounded = True
    seen = 0
    while not cursor.at_end():
        char = cursor.peek()
        if char == "\n":
            break
        if char == "'":
            cursor.advance()
            closed = True
            break
        if bounded and seen == MAX_CHAR_LITERAL_SCAN:
            if not _closing_quote_ahead(cursor):
                break
            bounded = False
        if char == "\\":
            _read_escape(cursor, CHAR_ESCAPES, pending)
        else:
            cursor.advance()
        seen += 1

    text = cursor.text_from(start)
    if not closed:
        errors.unterminated_char(text, start.line, start.column)
    elif seen == 0:
        errors.unterminated_char(text, start.line, start.column, "Empty character literal")
    elif seen > 1:
        errors.unterminated_char(
            text, start.line, start.column,
            f"Character literal holds {seen} characters, expected exactly one"
        )
    for sequence, location in pending:
        errors.bad_escape(sequence, location.line, location.column)

    return ScanResult.emit(_make_token(cursor, TokenCategory.CHAR_LITERAL, start))


def read_single_op(cursor: Cursor, errors: ErrorLog) -> ScanResult:
    start = cursor.location()
    category = SINGLE_CHAR_OPERATORS[cursor.advance()]
    return ScanResult.emit(_make_token(cursor, category, start))


def read_delimiter(cursor: Cursor, errors: ErrorLog) -> ScanResult:
    start = cursor.location()
    cursor.advance()
    return ScanResult.emit(_make_token(cursor, TokenCategory.DELIMITER, start))


def read_whitespace(cursor: Cursor, errors: ErrorLog) -> ScanResult:
    """Consumes a run of whitespace characters."""
    start = cursor.location()
    while not cursor.at_end() and cursor.peek() in WHITESPACE:
        cursor.advance()
    return ScanResult.discard(_make_token(cursor, TokenCategory.SPACE, start))


def skip_invalid_char(cursor: Cursor, errors: ErrorLog) -> ScanResult:
    """Fallback: log INVALID_CHAR and drop exactly one character."""
    start = cursor.location()
    char = cursor.peek()

    suggestions = None
    at_word_start = cursor.pos == 0 or not is_word_char(cursor.source[cursor.pos - 1])
    if is_lower(char) and at_word_start:
        word = _lowercase_run(cursor)
        if len(word) > 1:
            suggestions = ErrorRecovery.suggest_keyword_corrections(word)

    errors.bad_char(char, start.line, start.column, suggestions)
    cursor.advance()
    return ScanResult.skip(_make_token(cursor, TokenCategory.INVALID, start))


# Strict priority order; the first matching rule wins.
RULES: Tuple[Rule, ...] = (
    Rule("block_comment", _starts_block_comment, read_block_comment),
    Rule("line_comment", _starts_line_comment, read_line_comment),
    Rule("two_char_operator", _starts_two_char_op, read_two_char_op),
    Rule("keyword", _starts_keyword, read_keyword),
    Rule("boolean", _starts_boolean, read_boolean),
    Rule("identifier", _starts_identifier, read_identifier),
    Rule("real", _starts_real, read_real),
    Rule("integer", _starts_number, read_integer),
    Rule("text", _starts_text, read_text),
    Rule("char", _starts_char, read_char),
    Rule("single_char_operator", _starts_single_op, read_single_op),
    Rule("delimiter", _starts_delimiter, read_delimiter),
    Rule("whitespace", _starts_whitespace, read_whitespace),
    Rule("invalid_char", _always, skip_invalid_char),
)


def match_rule(cursor: Cursor, rules: Tuple[Rule, ...] = RULES) -> Rule:
    """The first rule whose predicate holds at the cursor."""
    for rule in rules:
        if rule.matches(cursor):
            return rule
    raise ValueError(f"no rule matches at {cursor!r}; rule table lacks a fallback")
