"""Tests for the immutable Cursor input view and result types."""

from __future__ import annotations

import pytest

from rarsec import Cursor, ParseResult, Some

# ============================================================================
# CURSOR BASIC TESTS
# ============================================================================


class TestCursorBasic:
    """Test basic cursor functionality."""

    def test_create_cursor(self) -> None:
        """Create cursor at position 0."""
        cursor = Cursor("hello", 0)

        assert cursor.source == "hello"
        assert cursor.pos == 0
        assert not cursor.is_eof

    def test_default_position_is_start(self) -> None:
        """Position defaults to 0."""
        assert Cursor("hello").pos == 0

    def test_cursor_immutability(self) -> None:
        """Cursor is immutable (frozen dataclass)."""
        cursor = Cursor("hello", 0)

        with pytest.raises(AttributeError):
            cursor.pos = 5  # type: ignore[misc]


# ============================================================================
# EOF DETECTION
# ============================================================================


class TestCursorEOF:
    """Test EOF detection."""

    def test_is_eof_false_in_middle(self) -> None:
        assert not Cursor("hello", 2).is_eof

    def test_is_eof_true_at_end(self) -> None:
        assert Cursor("hello", 5).is_eof

    def test_is_eof_true_for_empty_source(self) -> None:
        assert Cursor("", 0).is_eof

    def test_current_raises_at_eof(self) -> None:
        """current raises EOFError instead of returning None."""
        with pytest.raises(EOFError, match="position 5"):
            _ = Cursor("hello", 5).current


# ============================================================================
# NAVIGATION
# ============================================================================


class TestCursorNavigation:
    """Test advance, peek, and slicing."""

    def test_advance_returns_new_cursor(self) -> None:
        cursor = Cursor("hello", 0)
        new_cursor = cursor.advance()

        assert cursor.pos == 0
        assert new_cursor.pos == 1
        assert new_cursor.source is cursor.source

    def test_advance_clamps_to_end(self) -> None:
        assert Cursor("hi", 1).advance(10).pos == 2

    def test_peek(self) -> None:
        cursor = Cursor("abc", 1)

        assert cursor.peek() == "b"
        assert cursor.peek(1) == "c"
        assert cursor.peek(2) is None

    def test_rest_is_suffix(self) -> None:
        assert Cursor("hello", 2).rest == "llo"
        assert Cursor("hello", 5).rest == ""

    def test_startswith_checks_from_position(self) -> None:
        cursor = Cursor("let x", 4)

        assert cursor.startswith("x")
        assert not cursor.startswith("let")
        assert Cursor("let x", 0).startswith("let")

    def test_slice_to(self) -> None:
        start = Cursor("hello world", 0)
        end = start.advance(5)

        assert start.slice_to(end.pos) == "hello"

    def test_equality_is_by_value(self) -> None:
        """Two views of the same source at the same position are equal."""
        source = "abc"
        assert Cursor(source, 1) == Cursor(source, 0).advance()


# ============================================================================
# RESULT TYPES
# ============================================================================


class TestParseResult:
    """Test ParseResult and Some."""

    def test_remainder(self) -> None:
        result = ParseResult("h", Cursor("hello", 1))

        assert result.value == "h"
        assert result.remainder == "ello"

    def test_unit_result_is_not_failure(self) -> None:
        """A result carrying None is still a result."""
        result = ParseResult(None, Cursor("", 0))

        assert result is not None
        assert result.value is None

    def test_some_distinguishes_falsy_values(self) -> None:
        assert Some(None) != Some("")
        assert Some(0).value == 0
        assert Some("x") == Some("x")
