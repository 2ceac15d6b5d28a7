"""Hypothesis strategies for parser inputs and small parsers."""

from __future__ import annotations

from hypothesis import strategies as st
from hypothesis.strategies import composite

from rarsec import Parser, character, digit, empty, letter, many, none_of, one_of, whitespace

# Source text: any Unicode except lone surrogates
source_text = st.text(
    alphabet=st.characters(exclude_categories=["Cs"]),
    min_size=0,
    max_size=50,
)

# Small alphabet so generated parsers actually match generated text
SMALL_ALPHABET = "ab1, \n"

small_text = st.text(alphabet=SMALL_ALPHABET, max_size=20)

single_chars = st.sampled_from(SMALL_ALPHABET)


@composite
def char_sets(draw: st.DrawFn) -> str:
    """Generate a (possibly empty) set of characters from the small alphabet."""
    return "".join(draw(st.sets(single_chars, max_size=len(SMALL_ALPHABET))))


@composite
def simple_parsers(draw: st.DrawFn) -> Parser[object]:
    """Generate a primitive parser, possibly wrapped in many()."""
    base = draw(
        st.one_of(
            single_chars.map(character),
            char_sets().map(one_of),
            char_sets().map(none_of),
            st.sampled_from([digit(), letter(), whitespace(), empty()]),
        )
    )
    if draw(st.booleans()):
        return many(base)
    return base
