"""Exception hierarchy for rarsec.

Parse failure is never an exception: parsers return ``None``. The
classes below report misuse of the library itself (invalid constructor
arguments, bad lazy factories, runaway recursion).

Python 3.13+. Zero external dependencies.
"""

__all__ = [
    "DepthLimitExceededError",
    "ParserDefinitionError",
    "RarsecError",
]


class RarsecError(Exception):
    """Base exception for all rarsec errors."""


class ParserDefinitionError(RarsecError, ValueError):
    """Invalid arguments passed to a parser constructor.

    Raised at composition time, or for lazy() when the factory first runs.
    Examples:
    - character("ab") (more than one character)
    - count(-1, p)
    - lazy(factory) where factory() returns something other than a Parser
    """


class DepthLimitExceededError(RarsecError):
    """Raised when a lazy parser nests deeper than its max_depth.

    This indicates either:
    - Adversarial input with pathological nesting
    - A left-recursive grammar that re-enters itself without consuming input
    """

    def __init__(self, name: str, max_depth: int) -> None:
        """Initialize DepthLimitExceededError.

        Args:
            name: Name of the lazy parser that exceeded its limit
            max_depth: The configured limit
        """
        super().__init__(f"Maximum nesting depth ({max_depth}) exceeded in {name}")
        self.name = name
        self.max_depth = max_depth
