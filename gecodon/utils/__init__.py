"""Shared utilities: errors, random streams and reports."""

from .rng_manager import RNGManager
from .validation import CodecError, ConfigurationError, InfeasibleThresholdError, ShapeError

__all__ = [
    'RNGManager',
    'CodecError',
    'ConfigurationError',
    'InfeasibleThresholdError',
    'ShapeError',
]
