import dataclasses
import logging

import pytest

from gecodon.config import (
    PRESET_MINIMAL,
    PRESET_RESEARCH,
    PRESET_STANDARD,
    CodecConfig,
    build_codec_config,
)
from gecodon.decoding.gene_map import GeneMapMethod, gene_map_bucket, gene_map_mod
from gecodon.precision.lcm_table import t_lcm
from gecodon.precision.search import PrecisionMethod, mlcmg_codon_precision
from gecodon.utils.validation import ConfigurationError, InfeasibleThresholdError

# Non-terminals with 2, 3 and 5 alternatives
LHS_235 = ["A", "A", "B", "B", "B", "C", "C", "C", "C", "C"]


def test_defaults_resolve_lcm_precision_and_mod_map():
    config = build_codec_config(LHS_235)
    assert isinstance(config, CodecConfig)
    assert config.choices == (2, 3, 5)
    assert config.codons == 25
    assert config.precision == 5
    assert config.bits_on_gene == 125
    assert config.gene_map is gene_map_mod
    assert config.gene_map_method is GeneMapMethod.MOD
    assert config.precision_method is PrecisionMethod.LCM
    assert config.precision_fn is mlcmg_codon_precision
    assert config.max_depth == 5


def test_config_is_immutable():
    config = build_codec_config(LHS_235)
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.precision = 8


def test_unknown_config_key_rejected():
    with pytest.raises(ConfigurationError) as info:
        build_codec_config(LHS_235, {"codon_precison": 8})
    assert info.value.code == "unknown_config_key"


@pytest.mark.parametrize("key,value,code", [
    ("gene_map", "Modulo", "unknown_gene_map"),
    ("precision_method", "Maximal", "unknown_precision_method"),
    ("codon_precision", 65, "invalid_precision"),
    ("codon_precision", 0, "invalid_precision"),
    ("codons", 0, "invalid_config_value"),
    ("max_depth", -1, "invalid_config_value"),
])
def test_invalid_settings_fail_fast(key, value, code):
    with pytest.raises(ConfigurationError) as info:
        build_codec_config(LHS_235, {key: value})
    assert info.value.code == code


def test_threshold_method_precision():
    config = build_codec_config(LHS_235, {"precision_method": "ThresholdBounded", "p_crit": 0.01})
    assert config.precision == 8
    assert config.p_crit == 0.01


def test_threshold_method_infeasible_propagates():
    with pytest.raises(InfeasibleThresholdError):
        build_codec_config(LHS_235, {"precision_method": "MaxPBias", "p_crit": 1e-25})


def test_bucket_map_raises_derived_precision(caplog):
    with caplog.at_level(logging.INFO):
        config = build_codec_config(LHS_235, {"gene_map": "Bucket"})
    # LCM strategy gives 5 bits, the table needs 6 bits for 5 alternatives
    assert config.precision == 6
    assert config.codon_lcm == t_lcm(6).m_lcm == 60
    assert config.gene_map is gene_map_bucket
    assert "Raising codon precision" in caplog.text


def test_bucket_map_rejects_too_narrow_explicit_precision():
    with pytest.raises(ConfigurationError) as info:
        build_codec_config(LHS_235, {"gene_map": "Bucket", "codon_precision": 5})
    assert info.value.code == "bucket_precision_too_small"
    assert info.value.context["required"] == 6


def test_bucket_map_rejects_more_than_42_alternatives():
    lhs = ["A"] * 43 + ["B", "B"]
    with pytest.raises(ConfigurationError) as info:
        build_codec_config(lhs, {"gene_map": "Bucket"})
    assert info.value.code == "bucket_ceiling_exceeded"
    # The modulo rule has no such ceiling
    assert build_codec_config(lhs, {"gene_map": "Mod"}).precision == 7


def test_explicit_codon_lcm(caplog):
    config = build_codec_config(LHS_235, {"gene_map": "Bucket", "codon_precision": 8, "codon_lcm": 30})
    assert config.codon_lcm == 30
    with caplog.at_level(logging.WARNING):
        build_codec_config(LHS_235, {"gene_map": "Bucket", "codon_precision": 8, "codon_lcm": 20})
    assert "not a multiple" in caplog.text
    with pytest.raises(ConfigurationError) as info:
        build_codec_config(LHS_235, {"gene_map": "Bucket", "codon_precision": 8, "codon_lcm": 256})
    assert info.value.code == "invalid_codon_lcm"


def test_presets_build():
    minimal = build_codec_config(LHS_235, PRESET_MINIMAL)
    assert minimal.precision == 3
    assert minimal.codons == 10
    standard = build_codec_config(LHS_235, PRESET_STANDARD)
    assert standard.precision == 5
    research = build_codec_config(LHS_235, PRESET_RESEARCH)
    assert research.precision == 8
    assert research.gene_map is gene_map_bucket
    assert research.codon_lcm == t_lcm(8).m_lcm


def test_lcm_strategy_beyond_64_bits_fails_with_named_cause():
    choices = (37, 41, 43, 47, 53, 59, 61, 67, 71, 73, 79, 83)
    lhs = [f"N{c}" for c in choices for _ in range(c)]
    with pytest.raises(ConfigurationError) as info:
        build_codec_config(lhs, {"precision_method": "LCM"})
    assert info.value.code == "lcm_precision_exceeded"
    assert build_codec_config(lhs, {"precision_method": "Min"}).precision == 7
