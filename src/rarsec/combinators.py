"""Combinators: building new parsers from existing ones.

Every combinator takes Parser values and returns a new Parser. None of
them knows about concrete primitives; they only call sub-parsers and
thread cursors.

Backtracking:
    Cursors are immutable, so "backtracking" is simply reusing the cursor
    that was passed in. A failing sub-parser can never leave partial
    consumption behind.

Repetition and progress:
    An iteration that succeeds without advancing the cursor ends the
    repetition (after its value is recorded). Repeating it would yield the
    same result forever, e.g. many(optional(p)).
"""

from collections.abc import Callable
from typing import Any

from rarsec.core import Parser
from rarsec.cursor import Cursor, ParseResult, Some
from rarsec.errors import ParserDefinitionError

__all__ = [
    "between",
    "bind",
    "choice",
    "count",
    "fail",
    "many",
    "many1",
    "map_value",
    "option",
    "option_option",
    "optional",
    "pure",
    "sep_by",
    "sep_by1",
    "sequence",
    "skip_many",
    "skip_many1",
    "then",
]


# ============================================================================
# BASICS
# ============================================================================


def pure[T](value: T) -> Parser[T]:
    """Succeed with value without consuming input."""

    def parse_pure(cursor: Cursor) -> ParseResult[T] | None:
        return ParseResult(value, cursor)

    return Parser(parse_pure, f"pure({value!r})")


def fail() -> Parser[Any]:
    """Always fail. Identity element for choice()."""

    def parse_fail(_cursor: Cursor) -> ParseResult[Any] | None:
        return None

    return Parser(parse_fail, "fail()")


def map_value[T, U](f: Parser[T], fn: Callable[[T], U]) -> Parser[U]:
    """Run f and transform its value with fn."""

    def parse_map(cursor: Cursor) -> ParseResult[U] | None:
        result = f(cursor)
        if result is None:
            return None
        return ParseResult(fn(result.value), result.cursor)

    return Parser(parse_map, f"{f.name}.map({getattr(fn, '__name__', 'fn')})")


def bind[T, U](f: Parser[T], fn: Callable[[T], Parser[U]]) -> Parser[U]:
    """Run f, pass its value to fn, then run the returned parser on the remainder.

    This is what a do-block desugars to:

        >>> from rarsec import character, letter
        >>> same_twice = letter().bind(lambda c: character(c))
        >>> same_twice("aa").value
        'a'
        >>> same_twice("ab") is None
        True
    """

    def parse_bind(cursor: Cursor) -> ParseResult[U] | None:
        first = f(cursor)
        if first is None:
            return None
        return fn(first.value)(first.cursor)

    return Parser(parse_bind, f"{f.name}.bind({getattr(fn, '__name__', 'fn')})")


# ============================================================================
# CHOICE AND SEQUENCING
# ============================================================================


def choice[T](first: Parser[T], second: Parser[T], *rest: Parser[T]) -> Parser[T]:
    """Try each parser on the ORIGINAL input; return the first success.

    Example:
        >>> from rarsec import character
        >>> choice(character("x"), character("h"))("hello").value
        'h'
    """
    alternatives = (first, second, *rest)

    def parse_choice(cursor: Cursor) -> ParseResult[T] | None:
        for alternative in alternatives:
            result = alternative(cursor)
            if result is not None:
                return result
        return None

    return Parser(parse_choice, " | ".join(p.name for p in alternatives))


def sequence[T, U](f: Parser[T], g: Parser[U]) -> Parser[tuple[T, U]]:
    """Run f then g on f's remainder; produce the pair of both values."""

    def parse_sequence(cursor: Cursor) -> ParseResult[tuple[T, U]] | None:
        left = f(cursor)
        if left is None:
            return None
        right = g(left.cursor)
        if right is None:
            return None
        return ParseResult((left.value, right.value), right.cursor)

    return Parser(parse_sequence, f"({f.name} + {g.name})")


def then[U](f: Parser[Any], g: Parser[U]) -> Parser[U]:
    """Run f then g; keep only g's value."""

    def parse_then(cursor: Cursor) -> ParseResult[U] | None:
        prefix = f(cursor)
        if prefix is None:
            return None
        return g(prefix.cursor)

    return Parser(parse_then, f"({f.name} >> {g.name})")


def between[T](open: Parser[Any], close: Parser[Any], p: Parser[T]) -> Parser[T]:  # noqa: A002
    """Parse open, p, close; keep p's value.

    A close mismatch after p succeeded fails the whole parser; p is not
    retried with a shorter match.

    Example:
        >>> from rarsec import character, letter, many
        >>> between(character("("), character(")"), many(letter()))("(hi)").value
        ['h', 'i']
    """

    def parse_between(cursor: Cursor) -> ParseResult[T] | None:
        opened = open(cursor)
        if opened is None:
            return None
        inner = p(opened.cursor)
        if inner is None:
            return None
        closed = close(inner.cursor)
        if closed is None:
            return None
        return ParseResult(inner.value, closed.cursor)

    return Parser(parse_between, f"between({open.name}, {close.name}, {p.name})")


# ============================================================================
# OPTIONALITY
# ============================================================================


def option[T](default: T, f: Parser[T]) -> Parser[T]:
    """Try f; on failure produce default without consuming."""

    def parse_option(cursor: Cursor) -> ParseResult[T] | None:
        result = f(cursor)
        if result is None:
            return ParseResult(default, cursor)
        return result

    return Parser(parse_option, f"option({default!r}, {f.name})")


def option_option[T](f: Parser[T]) -> Parser[Some[T] | None]:
    """Try f; produce Some(value) on success, None (absent) on failure.

    Example:
        >>> from rarsec import empty
        >>> option_option(empty())("x").value  # matched, value is None
        Some(value=None)
    """

    def parse_option_option(cursor: Cursor) -> ParseResult[Some[T] | None] | None:
        result = f(cursor)
        if result is None:
            return ParseResult(None, cursor)
        return ParseResult(Some(result.value), result.cursor)

    return Parser(parse_option_option, f"option_option({f.name})")


def optional(f: Parser[Any]) -> Parser[None]:
    """Try f and discard its value. Never fails."""

    def parse_optional(cursor: Cursor) -> ParseResult[None] | None:
        result = f(cursor)
        if result is None:
            return ParseResult(None, cursor)
        return ParseResult(None, result.cursor)

    return Parser(parse_optional, f"optional({f.name})")


# ============================================================================
# REPETITION
# ============================================================================


def _repeat[T](f: Parser[T], cursor: Cursor, values: list[T] | None) -> Cursor:
    """Apply f until it fails or stops making progress.

    Appends produced values to values (unless None). Returns the cursor
    after the last successful application.
    """
    while True:
        result = f(cursor)
        if result is None:
            return cursor
        if values is not None:
            values.append(result.value)
        if result.cursor.pos == cursor.pos:
            return cursor
        cursor = result.cursor


def many[T](f: Parser[T]) -> Parser[list[T]]:
    """Apply f greedily zero or more times. Never fails.

    Example:
        >>> from rarsec import one_of
        >>> many(one_of("he"))("hello").value
        ['h', 'e']
        >>> many(one_of("abc"))("hello").value
        []
    """

    def parse_many(cursor: Cursor) -> ParseResult[list[T]] | None:
        values: list[T] = []
        end = _repeat(f, cursor, values)
        return ParseResult(values, end)

    return Parser(parse_many, f"many({f.name})")


def many1[T](f: Parser[T]) -> Parser[list[T]]:
    """Apply f one or more times; fail if the first attempt fails."""

    def parse_many1(cursor: Cursor) -> ParseResult[list[T]] | None:
        first = f(cursor)
        if first is None:
            return None
        values = [first.value]
        if first.cursor.pos == cursor.pos:
            return ParseResult(values, first.cursor)
        end = _repeat(f, first.cursor, values)
        return ParseResult(values, end)

    return Parser(parse_many1, f"many1({f.name})")


def skip_many(f: Parser[Any]) -> Parser[None]:
    """Like many() but discard the values. Never fails."""

    def parse_skip_many(cursor: Cursor) -> ParseResult[None] | None:
        return ParseResult(None, _repeat(f, cursor, None))

    return Parser(parse_skip_many, f"skip_many({f.name})")


def skip_many1(f: Parser[Any]) -> Parser[None]:
    """Like many1() but discard the values."""

    def parse_skip_many1(cursor: Cursor) -> ParseResult[None] | None:
        first = f(cursor)
        if first is None:
            return None
        if first.cursor.pos == cursor.pos:
            return ParseResult(None, first.cursor)
        return ParseResult(None, _repeat(f, first.cursor, None))

    return Parser(parse_skip_many1, f"skip_many1({f.name})")


def count[T](n: int, f: Parser[T]) -> Parser[list[T]]:
    """Apply f exactly n times.

    count(0, f) succeeds with [] without consuming.

    Raises:
        ParserDefinitionError: If n is negative or not an int
    """
    if not isinstance(n, int) or isinstance(n, bool) or n < 0:
        raise ParserDefinitionError(f"count() expects a non-negative int, got {n!r}")

    def parse_count(cursor: Cursor) -> ParseResult[list[T]] | None:
        values: list[T] = []
        for _ in range(n):
            result = f(cursor)
            if result is None:
                return None
            values.append(result.value)
            cursor = result.cursor
        return ParseResult(values, cursor)

    return Parser(parse_count, f"count({n}, {f.name})")


# ============================================================================
# SEPARATED LISTS
# ============================================================================


def _sep_by_rest[T](
    f: Parser[T], sep: Parser[Any], cursor: Cursor, values: list[T]
) -> Cursor | None:
    """Continue a separated list after its first element.

    A matched separator makes the following element mandatory: if it is
    missing the whole list fails (None).
    """
    while True:
        separator = sep(cursor)
        if separator is None:
            return cursor
        element = f(separator.cursor)
        if element is None:
            return None
        values.append(element.value)
        if element.cursor.pos == cursor.pos:
            return cursor
        cursor = element.cursor


def sep_by[T](f: Parser[T], sep: Parser[Any]) -> Parser[list[T]]:
    """Zero or more f separated by sep.

    Example:
        >>> from rarsec import character, digit
        >>> sep_by(digit(), character(","))("1,2,3").value
        ['1', '2', '3']
        >>> sep_by(digit(), character(","))("1,") is None  # dangling separator
        True
    """

    def parse_sep_by(cursor: Cursor) -> ParseResult[list[T]] | None:
        first = f(cursor)
        if first is None:
            return ParseResult([], cursor)
        values = [first.value]
        end = _sep_by_rest(f, sep, first.cursor, values)
        if end is None:
            return None
        return ParseResult(values, end)

    return Parser(parse_sep_by, f"sep_by({f.name}, {sep.name})")


def sep_by1[T](f: Parser[T], sep: Parser[Any]) -> Parser[list[T]]:
    """One or more f separated by sep."""

    def parse_sep_by1(cursor: Cursor) -> ParseResult[list[T]] | None:
        first = f(cursor)
        if first is None:
            return None
        values = [first.value]
        end = _sep_by_rest(f, sep, first.cursor, values)
        if end is None:
            return None
        return ParseResult(values, end)

    return Parser(parse_sep_by1, f"sep_by1({f.name}, {sep.name})")
