"""Immutable input view and result types.

Implements the immutable cursor pattern: a parser never mutates or copies
the source text, it receives a Cursor and returns a new one.
Python 3.13+. Zero external dependencies.

Design Philosophy:
    - Cursor is immutable (frozen dataclass)
    - Cursor is a suffix view: (source, pos) with O(1) successor creation
    - EOF is a state (is_eof), not a return value
    - Every advance() returns NEW cursor (the old view stays valid for
      backtracking)
    - Failure is None; success is a ParseResult

Pattern Reference:
    - Rust nom parser combinator library
    - Haskell Parsec
"""

from dataclasses import dataclass

__all__ = ["Cursor", "ParseResult", "Some"]


@dataclass(frozen=True, slots=True)
class Cursor:
    """Immutable view over the unconsumed suffix of a source string.

    Key Design Decisions:
        1. Frozen dataclass - Immutability enforced by Python
        2. Slots - Cursors are created once per consumed character
        3. Simple position - Just an integer offset into a shared source
        4. EOF is a property - Not a return value

    Example:
        >>> cursor = Cursor("hello", 0)
        >>> cursor.current
        'h'
        >>> new_cursor = cursor.advance()
        >>> new_cursor.rest
        'ello'
        >>> cursor.current  # Original unchanged (backtracking is free)
        'h'
    """

    source: str
    pos: int = 0

    @property
    def is_eof(self) -> bool:
        """Check if at end of input.

        Returns:
            True if position >= source length
        """
        return self.pos >= len(self.source)

    @property
    def current(self) -> str:
        """Get current character.

        Returns:
            Current character at position

        Raises:
            EOFError: If at end of input

        Note:
            Check is_eof first. Primitives never let this escape.
        """
        if self.is_eof:
            raise EOFError(f"Unexpected EOF at position {self.pos}")
        return self.source[self.pos]

    @property
    def rest(self) -> str:
        """Remaining unconsumed text.

        Materializes a substring, so only call it when the text is needed
        (results, tests, debugging), not inside parsing loops.
        """
        return self.source[self.pos :]

    def peek(self, offset: int = 0) -> str | None:
        """Peek at character with offset without advancing.

        Args:
            offset: Offset from current position (0 = current, 1 = next)

        Returns:
            Character at position + offset, or None if beyond EOF
        """
        target_pos = self.pos + offset
        if target_pos >= len(self.source):
            return None
        return self.source[target_pos]

    def advance(self, count: int = 1) -> "Cursor":
        """Return new cursor advanced by count positions.

        Args:
            count: Number of positions to advance (default: 1)

        Returns:
            New Cursor instance at new position (original unchanged),
            clamped to the end of the source

        Example:
            >>> cursor = Cursor("hello", 0)
            >>> cursor.advance(3).pos
            3
            >>> cursor.advance(10).pos  # Clamped
            5
        """
        new_pos = min(self.pos + count, len(self.source))
        return Cursor(self.source, new_pos)

    def startswith(self, text: str) -> bool:
        """Check whether the unconsumed input starts with text (no copy)."""
        return self.source.startswith(text, self.pos)

    def slice_to(self, end_pos: int) -> str:
        """Extract source slice from current position to end_pos.

        Useful for extracting matched text after parsing:

            >>> start = Cursor("hello world", 0)
            >>> end = start.advance(5)
            >>> start.slice_to(end.pos)
            'hello'
        """
        return self.source[self.pos : end_pos]


@dataclass(frozen=True, slots=True)
class ParseResult[T]:
    """Successful parse: produced value and the cursor after it.

    Type Parameters:
        T: The type of the parsed value

    Pattern:
        Every parser function has signature:
            def parse_foo(cursor: Cursor) -> ParseResult[Foo] | None:
                ...
                return ParseResult(parsed_value, new_cursor)

        None means "no match at this position". There is no error payload.

    Example:
        >>> cursor = Cursor("hello", 0)
        >>> result = ParseResult("h", cursor.advance())
        >>> result.value
        'h'
        >>> result.remainder
        'ello'
    """

    value: T
    cursor: Cursor

    @property
    def remainder(self) -> str:
        """Unconsumed input text after this result."""
        return self.cursor.rest


@dataclass(frozen=True, slots=True)
class Some[T]:
    """Present value produced by option_option().

    Distinguishes "parsed a value that happens to be None/falsy"
    (``Some(None)``, ``Some("")``) from "parsed nothing" (``None``).
    """

    value: T
