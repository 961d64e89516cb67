"""Least-common-multiple table for the bucket rule.

The bucket rule removes the modulo bias for every non-terminal with at most
``m`` alternatives when the codon range is a multiple of ``lcm(1..m)``. For a
``k``-bit codon the largest usable ``m`` is bounded by ``lcm(1..m) < 2^k``.
With 64-bit codons the table stops at ``m == 42``.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from itertools import accumulate
from numbers import Integral
from operator import mul
from typing import Iterable

from gecodon.utils.validation import ConfigurationError

MAX_PRECISION = 64
MAX_TABLE_CHOICES = 42

# Factor by which lcm(1..m-1) grows to lcm(1..m): p when m == p^j, else 1.
_PRIME_POWER_FACTORS: dict[int, int] = {
    2: 2, 3: 3, 4: 2, 5: 5, 7: 7, 8: 2, 9: 3, 11: 11, 13: 13, 16: 2, 17: 17,
    19: 19, 23: 23, 25: 5, 27: 3, 29: 29, 31: 31, 32: 2, 37: 37, 41: 41,
}

# _CUMULATIVE_LCM[m - 1] == lcm(1..m)
_CUMULATIVE_LCM: tuple[int, ...] = tuple(
    accumulate((_PRIME_POWER_FACTORS.get(m, 1) for m in range(1, MAX_TABLE_CHOICES + 1)), mul)
)


@dataclass(frozen=True)
class LCMProfile:
    """Precision profile of a codon width.

    Attributes:
        k: Number of bits of the codon.
        m: Maximal number of alternatives of a non-terminal that the bucket
           rule handles without bias at this width.
        m_lcm: Least common multiple of the prime factors of ``1..m``.
    """

    k: int
    m: int
    m_lcm: int


def check_precision(k) -> int:
    """Validate a codon width, returning it as ``int``."""
    if isinstance(k, bool) or not isinstance(k, Integral) or not 1 <= k <= MAX_PRECISION:
        raise ConfigurationError(
            "invalid_precision",
            f"Codon precision must be an integer in 1..{MAX_PRECISION}",
            precision=k,
        )
    return int(k)


@lru_cache(maxsize=None, typed=True)
def t_lcm(k: int) -> LCMProfile:
    """Return the LCM profile ``(k, m, m_lcm)`` of a ``k``-bit codon.

    ``m`` counts the cumulative LCMs strictly below ``2^k``. Since
    ``lcm(1..1) == 1`` every width supports at least one choice.
    """
    k = check_precision(k)
    bound = 1 << k
    m = sum(1 for value in _CUMULATIVE_LCM if value < bound)
    return LCMProfile(k=k, m=m, m_lcm=_CUMULATIVE_LCM[m - 1])


def bucket_codon_precision(choices: Iterable[int]) -> int:
    """Smallest codon width whose LCM profile supports every choice count.

    Raises:
        ConfigurationError: if a non-terminal has more than 42 alternatives;
            the bucket rule cannot correct its bias with 64-bit codons.
    """
    largest = max(choices)
    if largest > MAX_TABLE_CHOICES:
        raise ConfigurationError(
            "bucket_ceiling_exceeded",
            f"Bucket rule supports at most {MAX_TABLE_CHOICES} alternatives per non-terminal "
            f"at {MAX_PRECISION}-bit precision",
            max_choices=largest,
        )
    return next(k for k in range(1, MAX_PRECISION + 1) if t_lcm(k).m >= largest)


__all__ = [
    "MAX_PRECISION",
    "MAX_TABLE_CHOICES",
    "LCMProfile",
    "check_precision",
    "t_lcm",
    "bucket_codon_precision",
]
