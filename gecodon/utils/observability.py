"""Precision reports and determinism signatures.

``precision_report`` collects everything needed to choose a codon width for a
grammar into one JSON-serializable dict; ``determinism_signature`` hashes its
canonical form so two runs can be compared cheaply.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any, Optional

from gecodon.precision.bias import codon_choice_biases
from gecodon.precision.choice_vector import choice_vector_of, grammar_lhs, lcm_of_choices
from gecodon.precision.lcm_table import t_lcm
from gecodon.precision.search import PrecisionMethod, precision_factory
from gecodon.utils.validation import ConfigurationError

REPORT_SCHEMA_VERSION = 1


def precision_report(grammar: Any, p_crit: Optional[float] = None) -> dict[str, Any]:
    """Widths and biases of every precision strategy for ``grammar``.

    The threshold strategy is only reported when ``p_crit`` is given; its
    errors (e.g. an infeasible threshold) propagate to the caller. A Min or
    LCM width beyond 64 bits is recorded as that strategy's error entry so
    the remaining strategies are still reported.
    """
    lhs = grammar_lhs(grammar)
    cv = choice_vector_of(lhs)
    methods = [PrecisionMethod.MIN, PrecisionMethod.LCM]
    if p_crit is not None:
        methods.append(PrecisionMethod.THRESHOLD_BOUNDED)

    strategies: dict[str, Any] = {}
    for method in methods:
        try:
            k = precision_factory(method)(lhs, p_crit)
        except ConfigurationError as exc:
            if method is PrecisionMethod.THRESHOLD_BOUNDED:
                raise
            strategies[method.value] = {"precision": None, "error": exc.code, "context": dict(exc.context)}
            continue
        profile = t_lcm(k)
        strategies[method.value] = {
            "precision": k,
            "lcm_profile": {"k": profile.k, "m": profile.m, "m_lcm": profile.m_lcm},
            "biases": [record.as_row() for record in codon_choice_biases(cv, k)],
        }

    return {
        "schema_version": REPORT_SCHEMA_VERSION,
        "choice_vector": list(cv),
        "mlcmg": lcm_of_choices(cv),
        "p_crit": p_crit,
        "strategies": strategies,
    }


def determinism_signature(report: dict[str, Any]) -> str:
    payload = json.dumps(report, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


__all__ = [
    "REPORT_SCHEMA_VERSION",
    "precision_report",
    "determinism_signature",
]
