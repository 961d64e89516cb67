"""Choice vector of a compiled grammar.

Only the number of alternatives per non-terminal matters for bias analysis,
so two non-terminals with the same number of productions collapse into one
entry.
"""

from __future__ import annotations

import math
from collections import Counter
from typing import Any, Sequence

from gecodon.utils.validation import ConfigurationError

ChoiceVector = tuple[int, ...]


def grammar_lhs(grammar: Any) -> Sequence[Any]:
    """Return the left-hand-side sequence of a grammar or pass an LHS through.

    Accepts a plain sequence, an object with ``lhs``/``LHS`` or a compiled
    grammar whose production table ``PT`` exposes ``LHS``.
    """
    for attr in ("lhs", "LHS"):
        lhs = getattr(grammar, attr, None)
        if lhs is not None:
            return lhs
    table = getattr(grammar, "PT", None)
    if table is not None and getattr(table, "LHS", None) is not None:
        return table.LHS
    if isinstance(grammar, dict) and "lhs" in grammar:
        return grammar["lhs"]
    if isinstance(grammar, (str, bytes)):
        raise ConfigurationError("invalid_grammar", "Grammar LHS must be a sequence of symbols", grammar=grammar)
    return grammar


def choice_vector(lhs: Sequence[Any]) -> ChoiceVector:
    """Distinct numbers of alternatives over all non-terminals (ascending)."""
    counts = Counter(lhs)
    if not counts:
        raise ConfigurationError("empty_grammar", "Grammar has no productions")
    return tuple(sorted(set(counts.values())))


def choice_vector_of(grammar: Any) -> ChoiceVector:
    return choice_vector(grammar_lhs(grammar))


def mlcmg(lhs: Sequence[Any]) -> int:
    """Least common multiple of the choice vector of a grammar.

    See Keijzer, O'Neill, Ryan and Cattolico (2002), "Grammatical Evolution
    Rules: The Mod and the Bucket Rule". A codon range that is a multiple of
    this value selects every production without bias.
    """
    return lcm_of_choices(choice_vector_of(lhs))


def lcm_of_choices(cv: Sequence[int]) -> int:
    distinct = sorted(set(cv))
    if len(distinct) == 1:
        return distinct[0]
    return math.lcm(*distinct)


__all__ = [
    "ChoiceVector",
    "grammar_lhs",
    "choice_vector",
    "choice_vector_of",
    "mlcmg",
    "lcm_of_choices",
]
