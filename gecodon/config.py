"""Configuration for codon decoding.

A configuration starts as a plain dict (see the presets below) and is resolved
once against a grammar into an immutable ``CodecConfig``. Strategy names are
looked up exactly once here; components receive the resolved callables.

Keys:
    codons: Number of codons on a gene (default 25).
    codon_precision: Fixed codon width in bits; derived from the grammar by
        ``precision_method`` when absent.
    gene_map: ``"Mod"`` or ``"Bucket"``.
    precision_method: ``"Min"``, ``"LCM"`` or ``"ThresholdBounded"``
        (``"MaxPBias"`` is accepted as an alias).
    p_crit: Bias threshold for ``"ThresholdBounded"``.
    codon_lcm: Upper end of the bucket range; defaults to the LCM table
        entry of the codon width.
    max_depth: Maximal depth of the derivation tree.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from numbers import Integral
from typing import Any, Optional

from gecodon.decoding.gene_map import GeneMapFunction, GeneMapMethod, gene_map_factory, resolve_gene_map_method
from gecodon.precision.choice_vector import ChoiceVector, choice_vector_of, grammar_lhs
from gecodon.precision.lcm_table import bucket_codon_precision, check_precision, t_lcm
from gecodon.precision.search import PrecisionFunction, PrecisionMethod, precision_factory, resolve_precision_method
from gecodon.utils.validation import ConfigurationError

DEFAULTS: dict[str, Any] = {
    'codons': 25,
    'codon_precision': None,
    'gene_map': GeneMapMethod.MOD.value,
    'precision_method': PrecisionMethod.LCM.value,
    'p_crit': None,
    'codon_lcm': None,
    'max_depth': 5,
}

PRESET_MINIMAL: dict[str, Any] = {
    'codons': 10,
    'gene_map': 'Mod',
    'precision_method': 'Min',
    'max_depth': 4,
}

PRESET_STANDARD: dict[str, Any] = {
    'codons': 25,
    'gene_map': 'Mod',
    'precision_method': 'LCM',
    'max_depth': 5,
}

PRESET_RESEARCH: dict[str, Any] = {
    'codons': 50,
    'gene_map': 'Bucket',
    'precision_method': 'ThresholdBounded',
    'p_crit': 0.01,
    'max_depth': 8,
}


@dataclass(frozen=True)
class CodecConfig:
    """Resolved, immutable decoding configuration."""

    grammar: Any
    choices: ChoiceVector
    codons: int
    precision: int
    codon_lcm: int
    max_depth: int
    gene_map_method: GeneMapMethod
    precision_method: PrecisionMethod
    gene_map: GeneMapFunction
    precision_fn: PrecisionFunction
    p_crit: Optional[float] = None

    @property
    def bits_on_gene(self) -> int:
        return self.codons * self.precision

    def map_gene(self, gene: Any) -> list[int]:
        return self.gene_map(gene, self)


def _positive_int(key: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, Integral) or value < 1:
        raise ConfigurationError("invalid_config_value", f"{key} must be a positive integer", key=key, value=value)
    return int(value)


def build_codec_config(grammar: Any, config: Optional[dict] = None) -> CodecConfig:
    """Resolve a configuration dict against a grammar (or its LHS)."""
    config = dict(config or {})
    unknown = sorted(set(config) - set(DEFAULTS))
    if unknown:
        raise ConfigurationError("unknown_config_key", f"Unknown configuration keys: {unknown}", keys=tuple(unknown))
    settings = {**DEFAULTS, **config}

    choices = choice_vector_of(grammar)
    gene_map_method = resolve_gene_map_method(settings['gene_map'])
    precision_method = resolve_precision_method(settings['precision_method'])
    precision_fn = precision_factory(precision_method)
    p_crit = settings['p_crit']

    explicit_precision = settings['codon_precision']
    if explicit_precision is not None:
        precision = check_precision(explicit_precision)
    else:
        precision = check_precision(precision_fn(grammar_lhs(grammar), p_crit))

    if gene_map_method is GeneMapMethod.BUCKET:
        required = bucket_codon_precision(choices)
        if precision < required:
            if explicit_precision is not None:
                raise ConfigurationError(
                    "bucket_precision_too_small",
                    f"Bucket rule needs at least {required} bits for {max(choices)} alternatives",
                    precision=precision,
                    required=required,
                )
            logging.info(f"Raising codon precision from {precision} to {required} bits for the bucket rule")
            precision = required

    codon_lcm = settings['codon_lcm']
    if codon_lcm is None:
        codon_lcm = t_lcm(precision).m_lcm
    else:
        codon_lcm = _positive_int('codon_lcm', codon_lcm)
        if codon_lcm >= 1 << precision:
            raise ConfigurationError(
                "invalid_codon_lcm",
                "codon_lcm must be below 2^precision",
                codon_lcm=codon_lcm,
                precision=precision,
            )
        if any(codon_lcm % c for c in choices):
            logging.warning(f"codon_lcm={codon_lcm} is not a multiple of every choice count {choices}")

    resolved = CodecConfig(
        grammar=grammar,
        choices=choices,
        codons=_positive_int('codons', settings['codons']),
        precision=precision,
        codon_lcm=codon_lcm,
        max_depth=_positive_int('max_depth', settings['max_depth']),
        gene_map_method=gene_map_method,
        precision_method=precision_method,
        gene_map=gene_map_factory(gene_map_method),
        precision_fn=precision_fn,
        p_crit=p_crit,
    )
    logging.debug(
        f"Codec config: {resolved.codons} codons x {resolved.precision} bits, "
        f"{gene_map_method.value}/{precision_method.value}"
    )
    return resolved


__all__ = [
    'DEFAULTS',
    'PRESET_MINIMAL',
    'PRESET_STANDARD',
    'PRESET_RESEARCH',
    'CodecConfig',
    'build_codec_config',
]
