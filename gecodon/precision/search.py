"""Codon precision strategies.

Every strategy shares the signature ``f(lhs, p_crit=None) -> int`` so that a
configuration can hold any of them. ``lhs`` is the left-hand side of a
compiled grammar (or the grammar itself, see ``grammar_lhs``).

* ``Min``: the shortest codon able to address every production. Biased.
* ``LCM``: a codon range at least the LCM of the choice vector.
* ``ThresholdBounded`` (alias ``MaxPBias``): the shortest codon for which the
  modulo bias ``dp`` of every non-terminal is below ``p_crit``.
"""

from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Any, Callable, Iterable, Optional

from gecodon.precision.bias import choice_bias
from gecodon.precision.choice_vector import choice_vector_of, mlcmg
from gecodon.precision.lcm_table import MAX_PRECISION
from gecodon.utils.validation import ConfigurationError, InfeasibleThresholdError

PrecisionFunction = Callable[..., int]


class PrecisionMethod(str, Enum):
    MIN = "Min"
    LCM = "LCM"
    THRESHOLD_BOUNDED = "ThresholdBounded"


_METHOD_ALIASES = {"MaxPBias": PrecisionMethod.THRESHOLD_BOUNDED}


def bits_for(n: int) -> int:
    """Smallest ``k >= 1`` with ``2^k >= n``."""
    return max(1, (int(n) - 1).bit_length())


def _within_ceiling(required_bits: int, code: str, message: str, **context: Any) -> int:
    if required_bits > MAX_PRECISION:
        raise ConfigurationError(
            code,
            f"{message} needs more than {MAX_PRECISION} bits",
            required_bits=required_bits,
            **context,
        )
    return required_bits


def min_codon_precision(lhs: Any, p_crit: Optional[float] = None) -> int:
    largest = max(choice_vector_of(lhs))
    return _within_ceiling(
        bits_for(largest), "min_precision_exceeded", "Addressing every production", max_choices=largest,
    )


def mlcmg_codon_precision(lhs: Any, p_crit: Optional[float] = None) -> int:
    value = mlcmg(lhs)
    return _within_ceiling(
        bits_for(value), "lcm_precision_exceeded", "The LCM of the choice vector", mlcmg=value,
    )


def _check_threshold(p_crit) -> float:
    try:
        value = float(p_crit)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError("invalid_threshold", "Bias threshold must be a number", p_crit=p_crit) from exc
    if not math.isfinite(value) or value <= 0.0:
        raise ConfigurationError(
            "invalid_threshold",
            "Bias threshold must be a finite positive number",
            p_crit=p_crit,
        )
    return value


def codon_precision(cv: Iterable[int], p_crit: float) -> int:
    """Least codon width with modulo bias below ``p_crit`` for all choices.

    Each choice count is searched upwards from ``ceil(log2(max(cv)))``; the
    result is the maximum over all counts. Since ``dp`` does not increase
    with the width, every count stays below the threshold at the merged
    width.

    Raises:
        InfeasibleThresholdError: if some count needs more than 64 bits.
    """
    threshold = _check_threshold(p_crit)
    choices = sorted(set(int(c) for c in cv))
    if not choices:
        raise ConfigurationError("empty_choice_vector", "Choice vector is empty")
    start = bits_for(choices[-1])

    precisions: list[int] = []
    for c in choices:
        found = next((k for k in range(start, MAX_PRECISION + 1) if choice_bias(c, k).dp < threshold), None)
        if found is None:
            raise InfeasibleThresholdError(
                "threshold_not_achievable",
                f"No codon precision up to {MAX_PRECISION} bits keeps the bias below the threshold",
                choices=c,
                p_crit=threshold,
                best_dp=choice_bias(c, MAX_PRECISION).dp,
            )
        logging.debug(f"Choice count {c}: bias below {threshold} from {found} bits")
        precisions.append(found)
    return max(precisions)


def codon_precision_with_threshold(lhs: Any, p_crit: Optional[float] = None) -> int:
    if p_crit is None:
        raise ConfigurationError(
            "missing_threshold",
            f"Precision method {PrecisionMethod.THRESHOLD_BOUNDED.value} requires p_crit",
        )
    return codon_precision(choice_vector_of(lhs), p_crit)


_PRECISION_FUNCTIONS: dict[PrecisionMethod, PrecisionFunction] = {
    PrecisionMethod.MIN: min_codon_precision,
    PrecisionMethod.LCM: mlcmg_codon_precision,
    PrecisionMethod.THRESHOLD_BOUNDED: codon_precision_with_threshold,
}


def resolve_precision_method(method: Any) -> PrecisionMethod:
    if isinstance(method, PrecisionMethod):
        return method
    if isinstance(method, str):
        if method in _METHOD_ALIASES:
            return _METHOD_ALIASES[method]
        try:
            return PrecisionMethod(method)
        except ValueError:
            pass
    raise ConfigurationError(
        "unknown_precision_method",
        f"Precision method {method!r} does not exist",
        method=method,
        available=tuple(m.value for m in PrecisionMethod) + tuple(_METHOD_ALIASES),
    )


def precision_factory(method: Any = PrecisionMethod.LCM) -> PrecisionFunction:
    """Return the precision function selected by ``method``."""
    return _PRECISION_FUNCTIONS[resolve_precision_method(method)]


__all__ = [
    "PrecisionFunction",
    "PrecisionMethod",
    "bits_for",
    "min_codon_precision",
    "mlcmg_codon_precision",
    "codon_precision",
    "codon_precision_with_threshold",
    "resolve_precision_method",
    "precision_factory",
]
