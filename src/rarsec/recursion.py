"""Recursive grammars and depth limiting.

A grammar that refers to itself cannot be built eagerly: constructing
``expr`` would need ``expr`` to already exist. lazy() defers construction
until the parser is first invoked.

    >>> from rarsec import between, character, choice, empty, run
    >>> nested = lazy(lambda: choice(between(character("("), character(")"), nested), empty()))
    >>> run(nested, "((()))") is not None
    True

Depth limiting:
    Each lazy parser tracks how deeply it is nested inside itself on the
    current thread and raises DepthLimitExceededError past max_depth. This
    turns left recursion and pathological input into a clear error instead
    of a RecursionError deep inside the interpreter.

Thread Safety:
    Nesting depth lives in thread-local storage keyed by factory identity, so
    concurrent invocations on different threads never share counters.
"""

from __future__ import annotations

import functools
import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from threading import local as thread_local
from typing import Any

from rarsec.constants import MAX_DEPTH, RECURSION_RESERVE_FRAMES
from rarsec.core import Parser
from rarsec.cursor import Cursor, ParseResult
from rarsec.errors import DepthLimitExceededError, ParserDefinitionError

__all__ = ["DepthGuard", "depth_clamp", "lazy"]

logger = logging.getLogger(__name__)

# Per-thread nesting counters: {id(factory): DepthGuard}
_nesting_thread_local = thread_local()


@dataclass(slots=True)
class DepthGuard:
    """Context manager for tracking and limiting recursion depth.

    Usage:
        guard = DepthGuard(max_depth=50, name="expr")
        with guard:
            # Recursive operation
            ...

    Mutability Note:
        Intentionally mutable (not frozen=True) so the context manager
        protocol can increment/decrement current_depth. Each thread gets
        its own instance.

    Attributes:
        max_depth: Maximum allowed depth
        name: Label reported in DepthLimitExceededError
        current_depth: Current nesting depth
    """

    max_depth: int = MAX_DEPTH
    name: str = "parser"
    current_depth: int = field(default=0, init=False)

    def __enter__(self) -> DepthGuard:
        """Enter guarded section, increment depth.

        Checks the limit BEFORE incrementing: __exit__ is not called when
        __enter__ raises, so incrementing first would leave the counter
        permanently elevated.
        """
        if self.current_depth >= self.max_depth:
            raise DepthLimitExceededError(self.name, self.max_depth)
        self.current_depth += 1
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit guarded section, decrement depth."""
        self.current_depth -= 1


def depth_clamp(requested_depth: int, reserve_frames: int = RECURSION_RESERVE_FRAMES) -> int:
    """Clamp requested depth against Python recursion limit.

    Logs a warning if clamping occurs.

    Args:
        requested_depth: Desired maximum depth
        reserve_frames: Stack frames to reserve for call overhead

    Returns:
        Safe depth value, clamped if necessary

    Example:
        >>> import sys
        >>> depth_clamp(sys.getrecursionlimit() + 1) < sys.getrecursionlimit()
        True
    """
    max_safe_depth = sys.getrecursionlimit() - reserve_frames
    if requested_depth > max_safe_depth:
        logger.warning(
            "Requested depth %d exceeds Python recursion limit (%d). "
            "Clamping to %d to prevent RecursionError. "
            "Consider increasing sys.setrecursionlimit() if needed.",
            requested_depth,
            sys.getrecursionlimit(),
            max_safe_depth,
        )
        return max_safe_depth
    return requested_depth


def _guard_for(key: int, max_depth: int, name: str) -> DepthGuard:
    """Get (or create) this thread's guard for a lazy factory."""
    guards: dict[int, DepthGuard] | None = getattr(_nesting_thread_local, "guards", None)
    if guards is None:
        guards = {}
        _nesting_thread_local.guards = guards
    guard = guards.get(key)
    if guard is None:
        guard = DepthGuard(max_depth=max_depth, name=name)
        guards[key] = guard
    return guard


def _release_guard(key: int, guard: DepthGuard) -> None:
    """Drop the guard once the outermost invocation has returned."""
    if guard.current_depth == 0:
        _nesting_thread_local.guards.pop(key, None)


def lazy[T](
    factory: Callable[[], Parser[T]],
    max_depth: int = MAX_DEPTH,
    name: str | None = None,
) -> Parser[T]:
    """Defer building a parser until it is first invoked.

    The factory is called at most once per lazy parser (the result is
    cached) and must return a Parser.

    Nesting is counted per factory, so both of these styles are guarded:

        expr = lazy(lambda: ... expr ...)           # module-level value

        def expr() -> Parser[Node]:                 # constructor function
            return ... lazy(expr) ...

    Args:
        factory: Zero-argument callable returning the real parser
        max_depth: Maximum nesting of this parser inside itself
        name: Description for repr() and error messages

    Raises:
        ParserDefinitionError: If factory is not a callable (or is a Parser
            itself), max_depth is not positive, or the factory returns
            something other than a Parser
        DepthLimitExceededError: At parse time, when nesting exceeds max_depth
    """
    if isinstance(factory, Parser) or not callable(factory):
        raise ParserDefinitionError(f"lazy() expects a factory returning a Parser, got {factory!r}")
    if max_depth < 1:
        raise ParserDefinitionError(f"lazy() max_depth must be positive, got {max_depth}")

    limit = depth_clamp(max_depth)
    # The factory itself may be unhashable; it stays alive in this closure.
    key = id(factory)
    label = name or getattr(factory, "__name__", "factory")

    @functools.cache
    def build() -> Parser[T]:
        built: Any = factory()
        if not isinstance(built, Parser):
            raise ParserDefinitionError(f"lazy({label}) factory returned {built!r}, not a Parser")
        return built

    def parse_lazy(cursor: Cursor) -> ParseResult[T] | None:
        guard = _guard_for(key, limit, label)
        try:
            with guard:
                return build()(cursor)
        finally:
            _release_guard(key, guard)

    return Parser(parse_lazy, f"lazy({label})")
