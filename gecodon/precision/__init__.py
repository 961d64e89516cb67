"""Codon precision: LCM table, choice vectors, bias estimation and search."""

from .bias import BiasRecord, choice_bias, choice_partition, codon_choice_biases
from .choice_vector import choice_vector, choice_vector_of, grammar_lhs, lcm_of_choices, mlcmg
from .lcm_table import MAX_PRECISION, MAX_TABLE_CHOICES, LCMProfile, bucket_codon_precision, t_lcm
from .search import (
    PrecisionMethod,
    codon_precision,
    codon_precision_with_threshold,
    min_codon_precision,
    mlcmg_codon_precision,
    precision_factory,
)

__all__ = [
    'BiasRecord',
    'choice_bias',
    'choice_partition',
    'codon_choice_biases',
    'choice_vector',
    'choice_vector_of',
    'grammar_lhs',
    'lcm_of_choices',
    'mlcmg',
    'MAX_PRECISION',
    'MAX_TABLE_CHOICES',
    'LCMProfile',
    'bucket_codon_precision',
    't_lcm',
    'PrecisionMethod',
    'codon_precision',
    'codon_precision_with_threshold',
    'min_codon_precision',
    'mlcmg_codon_precision',
    'precision_factory',
]
