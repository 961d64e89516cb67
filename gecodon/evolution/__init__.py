"""Gene representation for grammatical evolution."""

from .gene import Gene, gene_from_bits, init_gene

__all__ = [
    "Gene",
    "gene_from_bits",
    "init_gene",
]
