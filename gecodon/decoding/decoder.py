"""Decode a gene for a context-free grammar.

Decoding works in two steps delegated to an external derivation-tree engine:

1. The decision vector drives a depth-first, left-to-right unfolding of the
   grammar from its start symbol into a (possibly incomplete) derivation tree.
2. The leaves of the tree are extracted.
"""

from __future__ import annotations

from typing import Any, Callable

from gecodon.utils.validation import ConfigurationError


def _grammar_field(grammar: Any, *names: str) -> Any:
    # Compiled grammar objects expose attributes, plain grammars are dicts
    for name in names:
        value = grammar.get(name) if isinstance(grammar, dict) else getattr(grammar, name, None)
        if value is not None:
            return value
    return None


def _start_symbol(grammar: Any) -> Any:
    value = _grammar_field(grammar, "start", "Start")
    if value is not None:
        return value
    raise ConfigurationError("missing_start_symbol", "Grammar exposes no start symbol")


def decode_gene(
    gene: Any,
    config: Any,
    build_tree: Callable[[Any, list[int], Any, int], Any],
    decode_tree: Callable[[Any, Any], Any],
) -> Any:
    """Map ``gene`` to decisions and unfold the configured grammar.

    Args:
        gene: Binary gene with ``codons * precision`` bits.
        config: Resolved ``CodecConfig``; must carry a grammar.
        build_tree: ``build_tree(start, decisions, grammar, max_depth)``
            returning a tree or a mapping holding it under ``"tree"``.
        decode_tree: ``decode_tree(tree, symbol_table)`` returning the leaves.

    Returns:
        Whatever ``decode_tree`` returns (the decoded phenotype).
    """
    grammar = getattr(config, "grammar", None)
    if grammar is None:
        raise ConfigurationError("missing_grammar", "Decoding requires a configured grammar")
    decisions = config.gene_map(gene, config)
    result = build_tree(_start_symbol(grammar), decisions, grammar, config.max_depth)
    tree = result["tree"] if isinstance(result, dict) and "tree" in result else result
    return decode_tree(tree, _grammar_field(grammar, "symbol_table", "ST"))


__all__ = ["decode_gene"]
