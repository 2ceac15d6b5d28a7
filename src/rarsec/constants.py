"""Shared constants for rarsec.

Centralized configuration values used across the combinator engine.
Placing them here avoids circular imports between core, combinators
and recursion support.

Python 3.13+. Zero external dependencies.
"""

__all__ = [
    "MAX_DEPTH",
    "RECURSION_RESERVE_FRAMES",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Maximum nesting of a single lazy (self-referencing) parser.
# Each nesting level costs several Python frames (lazy -> combinator closure
# -> sub-parser), so 100 levels stays well below the default interpreter
# recursion limit of 1000.
MAX_DEPTH: int = 100

# Frames kept free for call overhead when clamping a requested depth
# against sys.getrecursionlimit().
RECURSION_RESERVE_FRAMES: int = 50
