"""Gene maps and gene decoding."""

from .decoder import decode_gene
from .gene_map import GeneMapMethod, codon_values, gene_map_bucket, gene_map_factory, gene_map_mod

__all__ = [
    'decode_gene',
    'GeneMapMethod',
    'codon_values',
    'gene_map_bucket',
    'gene_map_factory',
    'gene_map_mod',
]
