"""Binary gene for grammatical evolution."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

import numpy as np

from gecodon.utils.rng_manager import RNGManager
from gecodon.utils.validation import ShapeError


def _freeze_bits(bits: Any) -> np.ndarray:
    arr = np.asarray(bits).reshape(-1)
    if arr.size and not np.isin(arr, (0, 1)).all():
        raise ShapeError("invalid_bits", "Gene bits must be 0 or 1", length=int(arr.size))
    frozen = arr.astype(np.uint8)
    frozen.setflags(write=False)
    return frozen


@dataclass
class Gene:
    """Fixed-length bit string plus evaluation bookkeeping.

    Attributes:
        bits: Read-only ``uint8`` vector of 0/1 values (the genotype).
        evaluated: True once the fitness is known.
        eval_failed: Set by the evaluation layer when evaluation failed.
        fitness: Fitness value, 0 until evaluated.
        gene_id: Unique identifier for this gene.
    """

    bits: np.ndarray
    evaluated: bool = False
    eval_failed: bool = False
    fitness: float = 0.0
    gene_id: uuid.UUID = field(default_factory=uuid.uuid4)

    def __post_init__(self) -> None:
        self.bits = _freeze_bits(self.bits)

    def __len__(self) -> int:
        return int(self.bits.size)


def gene_from_bits(bits: Iterable[int]) -> Gene:
    return Gene(bits=list(bits))


def init_gene(config: Any, rng_manager: RNGManager, gene_id: Optional[uuid.UUID] = None) -> Gene:
    """Random gene with ``config.bits_on_gene`` uniformly drawn bits.

    Bits come from a stream derived from the gene id, so the same seed and
    id reproduce the same gene regardless of initialization order.
    """
    gene_id = gene_id if gene_id is not None else uuid.uuid4()
    n_bits = int(config.bits_on_gene)
    rng = rng_manager.get_rng_for_initialization(gene_id)
    raw = rng.getrandbits(n_bits) if n_bits else 0
    bits = np.array([(raw >> (n_bits - 1 - i)) & 1 for i in range(n_bits)], dtype=np.uint8)
    return Gene(bits=bits, gene_id=gene_id)


__all__ = ["Gene", "gene_from_bits", "init_gene"]
