"""Hypothesis strategies for grammar trees and inputs.

Grammars are drawn over a tiny alphabet so that generated inputs hit both
matching and non-matching paths often. Trees are bounded in size to keep
unmemoized backtracking cheap.

Event-Emitting Strategies (HypoFuzz-Optimized):
    - combinator_grammars: Emits ``strategy=grammar_{root}``

Python 3.13+.
"""

from __future__ import annotations

from hypothesis import event
from hypothesis import strategies as st
from hypothesis.strategies import composite

from grammarengine.grammar import (
    And,
    Grammar,
    Literal,
    Many,
    Many1,
    Map,
    Optional,
    Or,
    Sequence,
    Skip,
    Token,
)

__all__ = [
    "ALPHABET",
    "combinator_grammars",
    "cursor_texts",
    "leaf_grammars",
    "never_matching_grammars",
]

ALPHABET = "ab1 "

cursor_texts: st.SearchStrategy[str] = st.text(alphabet=ALPHABET, max_size=20)

leaf_grammars: st.SearchStrategy[Grammar[str]] = st.one_of(
    st.sampled_from(["a", "b", "ab", "1", " "]).map(Literal),
    st.sampled_from([r"a+", r"b*", r"[0-9]+", r"\s*", r"a|b", r"(ab)+"]).map(Token),
)

# Characters outside ALPHABET: these grammars fail on every generated text.
never_matching_grammars: st.SearchStrategy[Grammar[str]] = st.one_of(
    st.sampled_from(["z", "xy", "Q"]).map(Literal),
    st.sampled_from([r"z+", r"[xy]", r"Q\d"]).map(Token),
)


def _extend(children: st.SearchStrategy[Grammar[object]]) -> st.SearchStrategy[Grammar[object]]:
    return st.one_of(
        st.tuples(children, children).map(lambda pair: Or(*pair)),
        st.tuples(children, children).map(lambda pair: And(*pair)),
        st.lists(children, min_size=1, max_size=4).map(Sequence),
        children.map(Many),
        children.map(Many1),
        children.map(Optional),
        children.map(Skip),
        children.map(lambda g: Map(g, repr)),
    )


@composite
def combinator_grammars(draw: st.DrawFn, *, max_leaves: int = 10) -> Grammar[object]:
    """Generate a random combinator tree.

    Args:
        draw: Hypothesis draw function.
        max_leaves: Upper bound on primitive matchers in the tree.
    """
    grammar = draw(st.recursive(leaf_grammars, _extend, max_leaves=max_leaves))
    event(f"strategy=grammar_{type(grammar).__name__}")
    return grammar
