"""Primitive recognizers.

Low-level parsers defined directly over character inspection. Each one
looks at the first character(s) of the cursor and either consumes them or
fails without consuming.

Character classes follow Unicode properties rather than str methods:
digit is any general category N*, letter is the Alphabetic property
(combining vowel signs included), upper/lower are the Uppercase and
Lowercase properties, and whitespace is the White_Space property.

Validation:
    Constructor arguments are checked when the parser is built and raise
    ParserDefinitionError. Parsing itself never raises on any input
    (exceptions from user predicates propagate unchanged).
"""

from __future__ import annotations

import unicodedata
from collections.abc import Callable, Iterable

import regex

from rarsec.core import Parser
from rarsec.cursor import Cursor, ParseResult
from rarsec.errors import ParserDefinitionError

__all__ = [
    "any_char",
    "character",
    "digit",
    "empty",
    "eof",
    "letter",
    "lower",
    "newline",
    "none_of",
    "one_of",
    "satisfy",
    "string",
    "upper",
    "whitespace",
]

_ALPHABETIC = regex.compile(r"\p{Alphabetic}")
_UPPERCASE = regex.compile(r"\p{Uppercase}")
_LOWERCASE = regex.compile(r"\p{Lowercase}")
_WHITE_SPACE = regex.compile(r"\p{White_Space}")


def _require_char(value: object, what: str) -> str:
    """Validate a single-character string argument."""
    if not isinstance(value, str) or len(value) != 1:
        raise ParserDefinitionError(f"{what} expects a single character, got {value!r}")
    return value


def _char_set(chars: Iterable[str], what: str) -> frozenset[str]:
    """Validate and freeze a set of single characters."""
    if isinstance(chars, str):
        return frozenset(chars)
    try:
        members = list(chars)
    except TypeError as e:
        msg = f"{what} expects an iterable of characters, got {chars!r}"
        raise ParserDefinitionError(msg) from e
    return frozenset(_require_char(c, what) for c in members)


def _has_property(pattern: regex.Pattern[str]) -> Callable[[str], bool]:
    """Predicate testing a single character against a property pattern."""

    def check(ch: str) -> bool:
        return pattern.fullmatch(ch) is not None

    return check


def empty() -> Parser[None]:
    """Always succeed, consuming nothing and producing None (unit)."""

    def parse_empty(cursor: Cursor) -> ParseResult[None] | None:
        return ParseResult(None, cursor)

    return Parser(parse_empty, "empty()")


def character(c: str) -> Parser[str]:
    """Parse exactly the character c.

    Example:
        >>> character("h")("hello").remainder
        'ello'
        >>> character("x")("hello") is None
        True
    """
    expected = _require_char(c, "character()")

    def parse_character(cursor: Cursor) -> ParseResult[str] | None:
        if cursor.is_eof or cursor.current != expected:
            return None
        return ParseResult(expected, cursor.advance())

    return Parser(parse_character, f"character({expected!r})")


def satisfy(predicate: Callable[[str], bool], name: str | None = None) -> Parser[str]:
    """Parse one character for which predicate holds.

    This is the generative base for the character-class recognizers.

    Args:
        predicate: Called with the next character; its exceptions propagate
        name: Optional description for repr() and log messages
    """
    if not callable(predicate):
        raise ParserDefinitionError(f"satisfy() expects a callable, got {predicate!r}")

    def parse_satisfy(cursor: Cursor) -> ParseResult[str] | None:
        if cursor.is_eof:
            return None
        ch = cursor.current
        if not predicate(ch):
            return None
        return ParseResult(ch, cursor.advance())

    label = name or getattr(predicate, "__name__", "predicate")
    return Parser(parse_satisfy, f"satisfy({label})")


def one_of(chars: Iterable[str]) -> Parser[str]:
    """Parse one character that is a member of chars.

    Example:
        >>> one_of("+-")("-1").value
        '-'
    """
    members = _char_set(chars, "one_of()")
    return satisfy(members.__contains__, f"one_of {''.join(sorted(members))!r}")


def none_of(chars: Iterable[str]) -> Parser[str]:
    """Parse one character that is NOT a member of chars (fails at EOF)."""
    members = _char_set(chars, "none_of()")

    def not_member(ch: str) -> bool:
        return ch not in members

    return satisfy(not_member, f"none_of {''.join(sorted(members))!r}")


def any_char() -> Parser[str]:
    """Parse any single character; fails only at end of input."""

    def anything(_ch: str) -> bool:
        return True

    return satisfy(anything, "any_char")


def digit() -> Parser[str]:
    """Parse one character of Unicode general category N (Nd, Nl, No)."""

    def is_numeric(ch: str) -> bool:
        return unicodedata.category(ch)[0] == "N"

    return satisfy(is_numeric, "digit")


def letter() -> Parser[str]:
    """Parse one character with the Unicode Alphabetic property."""
    return satisfy(_has_property(_ALPHABETIC), "letter")


def upper() -> Parser[str]:
    """Parse one character with the Unicode Uppercase property."""
    return satisfy(_has_property(_UPPERCASE), "upper")


def lower() -> Parser[str]:
    """Parse one character with the Unicode Lowercase property."""
    return satisfy(_has_property(_LOWERCASE), "lower")


def whitespace() -> Parser[str]:
    """Parse one character with the Unicode White_Space property."""
    return satisfy(_has_property(_WHITE_SPACE), "whitespace")


def newline() -> Parser[str]:
    """Parse a line feed (U+000A)."""
    return character("\n")


def string(text: str) -> Parser[str]:
    """Parse the literal text.

    Matching is all-or-nothing: a partial match consumes nothing.

    Example:
        >>> string("let")("let x").remainder
        ' x'
        >>> string("let")("lex") is None
        True
    """
    if not isinstance(text, str):
        raise ParserDefinitionError(f"string() expects a str, got {text!r}")

    def parse_string(cursor: Cursor) -> ParseResult[str] | None:
        if not cursor.startswith(text):
            return None
        return ParseResult(text, cursor.advance(len(text)))

    return Parser(parse_string, f"string({text!r})")


def eof() -> Parser[None]:
    """Succeed with None only at end of input."""

    def parse_eof(cursor: Cursor) -> ParseResult[None] | None:
        if not cursor.is_eof:
            return None
        return ParseResult(None, cursor)

    return Parser(parse_eof, "eof()")
