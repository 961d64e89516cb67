"""
gecodon - Codon decoding and choice-bias analysis for grammatical evolution

Maps binary genes to integer rule choices (modulo and bucket rules) and
computes, then minimizes, the selection bias each rule introduces.
"""

__version__ = "0.1.0"

# Expose common submodules for convenience
from .decoding import *  # noqa: F401,F403
from .evolution import *  # noqa: F401,F403
from .precision import *  # noqa: F401,F403
from .utils import *  # noqa: F401,F403

# Configuration presets as top-level names
from .config import PRESET_MINIMAL, PRESET_RESEARCH, PRESET_STANDARD, CodecConfig, build_codec_config  # noqa: F401
