"""
Quickstart Tutorial

Goals:
- Resolve a configuration against a grammar's left-hand side
- Initialize a random gene deterministically
- Map the gene to decisions with the modulo and bucket rules
"""

import uuid

from gecodon.config import PRESET_STANDARD, build_codec_config
from gecodon.evolution.gene import init_gene
from gecodon.utils.rng_manager import RNGManager

# Same seed and gene id give the same bits on every run
GENE_ID = uuid.UUID("00000000-0000-0000-0000-000000000001")


def main():
    # <expr> has three alternatives, <op> two, <var> five
    lhs = ["<expr>"] * 3 + ["<op>"] * 2 + ["<var>"] * 5

    config = build_codec_config(lhs, PRESET_STANDARD)
    print("choices:", config.choices)
    print("codon_precision:", config.precision, "bits_on_gene:", config.bits_on_gene)

    gene = init_gene(config, RNGManager(seed=42), gene_id=GENE_ID)
    print("mod_decisions:", config.map_gene(gene)[:8])

    bucket = build_codec_config(lhs, {**PRESET_STANDARD, "gene_map": "Bucket"})
    bucket_gene = init_gene(bucket, RNGManager(seed=42), gene_id=GENE_ID)
    print("bucket_precision:", bucket.precision, "codon_lcm:", bucket.codon_lcm)
    print("bucket_decisions:", bucket.map_gene(bucket_gene)[:8])


if __name__ == "__main__":
    main()
