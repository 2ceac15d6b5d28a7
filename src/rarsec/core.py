"""Parser abstraction and the run() driver.

A Parser wraps a plain function ``Cursor -> ParseResult[T] | None``. All
primitives and combinators build Parser values; composing them is ordinary
function calls done once, invoking them is a synchronous walk over the
input.

Architecture:
    - :mod:`rarsec.cursor` - Cursor (input view) and ParseResult
    - :mod:`rarsec.primitives` - Character-level recognizers
    - :mod:`rarsec.combinators` - Choice, sequencing, repetition, separation
    - :mod:`rarsec.recursion` - lazy() for self-referencing grammars

Thread Safety:
    Parser is frozen and closes only over immutable construction-time
    arguments, so one Parser value can be invoked concurrently from any
    number of threads.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from rarsec.cursor import Cursor, ParseResult

__all__ = ["ParseFn", "Parser", "run"]

logger = logging.getLogger(__name__)

type ParseFn[T] = Callable[[Cursor], ParseResult[T] | None]


@dataclass(frozen=True, slots=True, eq=False)
class Parser[T]:
    """Immutable, reusable parsing rule.

    Attributes:
        parse_fn: Function consuming a prefix of the cursor's input
        name: Human-readable description used in repr() and log messages

    Operators:
        ``f | g``  - choice(f, g)
        ``f >> g`` - then(f, g)
        ``f + g``  - sequence(f, g)

    Example:
        >>> from rarsec import character, letter, many
        >>> word = many(letter() | character("-"))
        >>> result = word("re-use it")
        >>> result.value
        ['r', 'e', '-', 'u', 's', 'e']
        >>> result.remainder
        ' it'
    """

    parse_fn: ParseFn[T]
    name: str = "parser"

    def __call__(self, text: str | Cursor) -> ParseResult[T] | None:
        """Run this parser on a string (viewed from position 0) or a Cursor.

        Returns:
            ParseResult with value and remaining cursor, or None on failure.
            On failure the caller's view is untouched.
        """
        cursor = Cursor(text, 0) if isinstance(text, str) else text
        return self.parse_fn(cursor)

    def __repr__(self) -> str:
        return f"<Parser {self.name}>"

    def __or__(self, other: Parser[Any]) -> Parser[Any]:
        from rarsec.combinators import choice  # noqa: PLC0415 - circular import

        return choice(self, other)

    def __rshift__(self, other: Parser[Any]) -> Parser[Any]:
        from rarsec.combinators import then  # noqa: PLC0415 - circular import

        return then(self, other)

    def __add__(self, other: Parser[Any]) -> Parser[tuple[T, Any]]:
        from rarsec.combinators import sequence  # noqa: PLC0415 - circular import

        return sequence(self, other)

    def map[U](self, fn: Callable[[T], U]) -> Parser[U]:
        """Transform the produced value with fn (consumption is unchanged)."""
        from rarsec.combinators import map_value  # noqa: PLC0415 - circular import

        return map_value(self, fn)

    def bind[U](self, fn: Callable[[T], Parser[U]]) -> Parser[U]:
        """Feed the produced value to fn and run the parser it returns."""
        from rarsec.combinators import bind  # noqa: PLC0415 - circular import

        return bind(self, fn)


def run[T](parser: Parser[T], text: str) -> ParseResult[T] | None:
    """Parse the entire input.

    This is the only place where the "whole input must be consumed" policy
    is enforced; individual parsers happily leave a remainder.

    Args:
        parser: Parser to invoke once from the start of text
        text: Complete input

    Returns:
        ParseResult whose remainder is empty, or None if the parser failed
        or left input unconsumed. Both cases are reported identically.

    Example:
        >>> from rarsec import count, letter
        >>> run(count(2, letter()), "he").value
        ['h', 'e']
        >>> run(count(2, letter()), "hey") is None
        True
    """
    result = parser(Cursor(text, 0))
    if result is None:
        logger.debug("%s: no match", parser.name)
        return None
    if not result.cursor.is_eof:
        logger.debug(
            "%s: stopped at position %d of %d, input not fully consumed",
            parser.name,
            result.cursor.pos,
            len(text),
        )
        return None
    return result
