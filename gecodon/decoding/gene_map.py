"""Gene maps: from a binary gene to the integer decision vector.

Both maps cut the gene into ``codons`` chunks of ``precision`` bits, read each
chunk as an unsigned big-endian integer ``v`` and rescale it:

* ``Mod``: ``1 + v`` in ``1..2^precision``. The tree builder reduces it
  modulo the number of alternatives (modulo rule, slightly biased).
* ``Bucket``: ``floor(1 + (LCM - 1) * v / (2^precision - 1))`` in ``1..LCM``
  (bucket rule of Keijzer et al. 2002). With ``LCM`` a multiple of every
  choice count the subsequent modulo reduction is nearly unbiased.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable

import numpy as np

from gecodon.utils.validation import ConfigurationError, ShapeError

GeneMapFunction = Callable[[Any, Any], list[int]]


class GeneMapMethod(str, Enum):
    MOD = "Mod"
    BUCKET = "Bucket"


def codon_values(gene: Any, codons: int, precision: int) -> list[int]:
    """Unsigned integer value of every codon of ``gene``."""
    bits = np.asarray(getattr(gene, "bits", gene))
    expected = int(codons) * int(precision)
    if bits.ndim != 1 or bits.size != expected:
        raise ShapeError(
            "gene_length_mismatch",
            "Gene length must equal codons * precision",
            length=int(bits.size),
            codons=int(codons),
            precision=int(precision),
        )
    # Object dtype keeps exact Python ints for 64-bit codons
    weights = np.array([1 << i for i in range(precision - 1, -1, -1)], dtype=object)
    return [int(v) for v in bits.reshape(codons, precision).astype(object).dot(weights)]


def gene_map_mod(gene: Any, config: Any) -> list[int]:
    return [1 + v for v in codon_values(gene, config.codons, config.precision)]


def gene_map_bucket(gene: Any, config: Any) -> list[int]:
    span = int(config.codon_lcm) - 1
    upper = (1 << int(config.precision)) - 1
    return [1 + (span * v) // upper for v in codon_values(gene, config.codons, config.precision)]


_GENE_MAPS: dict[GeneMapMethod, GeneMapFunction] = {
    GeneMapMethod.MOD: gene_map_mod,
    GeneMapMethod.BUCKET: gene_map_bucket,
}


def resolve_gene_map_method(method: Any) -> GeneMapMethod:
    if isinstance(method, GeneMapMethod):
        return method
    try:
        return GeneMapMethod(method)
    except ValueError:
        raise ConfigurationError(
            "unknown_gene_map",
            f"GeneMap method {method!r} does not exist",
            method=method,
            available=tuple(m.value for m in GeneMapMethod),
        ) from None


def gene_map_factory(method: Any = GeneMapMethod.MOD) -> GeneMapFunction:
    """Return the gene map selected by ``method`` (``"Mod"`` or ``"Bucket"``)."""
    return _GENE_MAPS[resolve_gene_map_method(method)]


__all__ = [
    "GeneMapMethod",
    "codon_values",
    "gene_map_mod",
    "gene_map_bucket",
    "resolve_gene_map_method",
    "gene_map_factory",
]
