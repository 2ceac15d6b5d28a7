"""rarsec - backtracking parser combinators.

Small composable parsers that consume a prefix of a string and either
succeed with a value plus the unconsumed remainder, or fail (None).

Public API:
    Parser - Immutable parsing rule (``|`` choice, ``>>`` then, ``+`` sequence)
    Cursor - Immutable view over the unconsumed input
    ParseResult - Successful result: value and remaining cursor
    Some - Present value produced by option_option()
    run - Parse a whole input, failing on leftover text

Primitives:
    empty, character, one_of, none_of, satisfy, any_char, string, eof,
    digit, letter, upper, lower, whitespace, newline

Combinators:
    choice, sequence, then, many, many1, skip_many, skip_many1, count,
    option, option_option, optional, between, sep_by, sep_by1,
    pure, fail, map_value, bind, lazy

Exceptions:
    RarsecError - Base exception class
    ParserDefinitionError - Invalid parser construction
    DepthLimitExceededError - Runaway recursion in a lazy parser

Example:
    >>> from rarsec import between, character, letter, many, run
    >>> run(between(character("("), character(")"), many(letter())), "(hi)").value
    ['h', 'i']
"""

from .combinators import (
    between,
    bind,
    choice,
    count,
    fail,
    many,
    many1,
    map_value,
    option,
    option_option,
    optional,
    pure,
    sep_by,
    sep_by1,
    sequence,
    skip_many,
    skip_many1,
    then,
)
from .core import Parser, run
from .cursor import Cursor, ParseResult, Some
from .errors import DepthLimitExceededError, ParserDefinitionError, RarsecError
from .primitives import (
    any_char,
    character,
    digit,
    empty,
    eof,
    letter,
    lower,
    newline,
    none_of,
    one_of,
    satisfy,
    string,
    upper,
    whitespace,
)
from .recursion import lazy

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("rarsec")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "Cursor",
    "DepthLimitExceededError",
    "ParseResult",
    "Parser",
    "ParserDefinitionError",
    "RarsecError",
    "Some",
    "__version__",
    "any_char",
    "between",
    "bind",
    "character",
    "choice",
    "count",
    "digit",
    "empty",
    "eof",
    "fail",
    "lazy",
    "letter",
    "lower",
    "many",
    "many1",
    "map_value",
    "newline",
    "none_of",
    "one_of",
    "option",
    "option_option",
    "optional",
    "pure",
    "run",
    "satisfy",
    "sep_by",
    "sep_by1",
    "sequence",
    "skip_many",
    "skip_many1",
    "string",
    "then",
    "upper",
    "whitespace",
]
