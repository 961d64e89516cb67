"""Choice bias of the modulo rule.

Reading a ``k``-bit codon modulo ``c`` spreads the ``2^k`` codon values over
``c`` productions. Unless ``c`` divides ``2^k`` some productions receive one
value more than others. With ``q, r = divmod(2^k, c)`` exactly ``r`` buckets
hold ``q + 1`` values and ``c - r`` hold ``q``; the distribution follows from
these two sizes alone, so nothing of size ``2^k`` is ever materialized.

Two statistics compare the induced distribution ``p`` with the uniform
distribution ``u`` over the ``c`` alternatives:

* ``dp = sum |u_i - p_i|``
* ``dH = H(u) - H(p)`` with ``H(x) = sum -x_i log2 x_i``
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from fractions import Fraction
from functools import lru_cache
from numbers import Integral
from typing import Any, Iterable

from gecodon.precision.lcm_table import check_precision
from gecodon.utils.validation import ConfigurationError

_LN2 = math.log(2.0)
_SERIES_CUTOFF = 1e-3


@dataclass(frozen=True)
class BiasRecord:
    """Bias of the modulo rule for ``choices`` alternatives at ``bits`` bits."""

    bits: int
    choices: int
    dp: float
    dh: float

    def as_row(self) -> dict[str, Any]:
        return {"Bits": self.bits, "Choices": self.choices, "dp": self.dp, "dH": self.dh}


def _check_choices(c) -> int:
    if isinstance(c, bool) or not isinstance(c, Integral) or c < 1:
        raise ConfigurationError(
            "invalid_choice_count",
            "Number of alternatives must be a positive integer",
            choices=c,
        )
    return int(c)


def choice_partition(c: int, k: int) -> tuple[tuple[int, int], ...]:
    """Bucket sizes of ``2^k`` codon values under ``mod c``.

    Returns ``((size, count), ...)`` with the larger bucket size first; a
    single entry when ``c`` divides ``2^k``.
    """
    c = _check_choices(c)
    k = check_precision(k)
    q, r = divmod(1 << k, c)
    if r == 0:
        return ((q, c),)
    return ((q + 1, r), (q, c - r))


def _relative_entropy_term(x: float) -> float:
    """``t ln t - t + 1`` at ``t = 1 + x``; non-negative for all ``x >= -1``."""
    if x == -1.0:
        return 1.0
    if abs(x) < _SERIES_CUTOFF:
        # Taylor series sum_{n>=2} (-x)^n / (n (n - 1)) avoids cancellation
        return x * x * (0.5 - x / 6.0 + x * x / 12.0 - x * x * x / 20.0)
    return (1.0 + x) * math.log1p(x) - x


@lru_cache(maxsize=4096, typed=True)
def choice_bias(c: int, k: int) -> BiasRecord:
    """Probability and entropy deviation of the modulo rule.

    ``dp`` is evaluated in exact rational arithmetic and rounded once.
    ``dH`` is evaluated as the divergence of ``p`` from the uniform
    distribution, ``(1/c) sum f(c p_i) / ln 2`` with ``f(t) = t ln t - t + 1``,
    which equals ``H(u) - H(p)`` but keeps full relative precision when the
    bias is tiny (large ``k``).
    """
    c = _check_choices(c)
    k = check_precision(k)
    n = 1 << k
    q, r = divmod(n, c)
    if r == 0:
        return BiasRecord(bits=k, choices=c, dp=0.0, dh=0.0)

    uniform = Fraction(1, c)
    dp = r * abs(uniform - Fraction(q + 1, n)) + (c - r) * abs(uniform - Fraction(q, n))

    # c * p_i - 1 for the large and the small buckets
    x_large = (c - r) / n
    x_small = -r / n
    dh = (r * _relative_entropy_term(x_large) + (c - r) * _relative_entropy_term(x_small)) / (c * _LN2)
    return BiasRecord(bits=k, choices=c, dp=float(dp), dh=dh)


def codon_choice_biases(cv: Iterable[int], precision: int) -> list[BiasRecord]:
    """Bias table for every entry of a choice vector at one codon width."""
    return [choice_bias(c, precision) for c in cv]


__all__ = [
    "BiasRecord",
    "choice_partition",
    "choice_bias",
    "codon_choice_biases",
]
