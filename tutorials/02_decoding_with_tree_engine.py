"""
Decoding Tutorial

Goals:
- Plug a derivation-tree engine into decode_gene
- Decode a gene of a tiny boolean grammar into its leaves

The toy engine below expands the leftmost non-terminal with production
``decision mod alternatives``; real runs use a full derivation-tree engine.
"""

import uuid
from types import SimpleNamespace

from gecodon.config import build_codec_config
from gecodon.decoding.decoder import decode_gene
from gecodon.evolution.gene import init_gene
from gecodon.utils.rng_manager import RNGManager

PRODUCTIONS = {
    "<f>": [["(", "<f>", "AND", "<f>", ")"], ["NOT", "<f>"], ["<v>"]],
    "<v>": [["x"], ["y"]],
}


def build_tree(start, decisions, grammar, max_depth):
    def expand(symbol, depth, pos):
        if symbol not in grammar.productions:
            return symbol, pos
        alternatives = grammar.productions[symbol]
        if depth >= max_depth or pos >= len(decisions):
            # Depth exhausted: take the last (terminating) alternative
            choice = len(alternatives) - 1
        else:
            choice = (decisions[pos] - 1) % len(alternatives)
            pos += 1
        children = []
        for child in alternatives[choice]:
            node, pos = expand(child, depth + 1, pos)
            children.append(node)
        return (symbol, children), pos

    tree, _ = expand(start, 0, 0)
    return {"tree": tree}


def decode_tree(tree, symbol_table):
    if isinstance(tree, str):
        return [tree]
    return [leaf for child in tree[1] for leaf in decode_tree(child, symbol_table)]


def main():
    grammar = SimpleNamespace(
        lhs=[lhs for lhs, alts in PRODUCTIONS.items() for _ in alts],
        start="<f>",
        symbol_table={},
        productions=PRODUCTIONS,
    )
    config = build_codec_config(grammar, {"codons": 12, "max_depth": 4})
    gene = init_gene(config, RNGManager(seed=3), gene_id=uuid.UUID(int=1))
    print("decisions:", config.map_gene(gene))
    print("phenotype:", " ".join(decode_gene(gene, config, build_tree, decode_tree)))


if __name__ == "__main__":
    main()
