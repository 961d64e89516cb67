import math
from fractions import Fraction

import numpy as np
import pytest

from gecodon.precision.bias import BiasRecord, choice_bias, choice_partition, codon_choice_biases
from gecodon.utils.validation import ConfigurationError


def _enumerated_bias(c, k):
    """Reference: count every residue of 1..2^k explicitly (small k only)."""
    residues = np.arange(1, 2**k + 1) % c
    sizes = np.bincount(residues, minlength=c)
    p = sizes / float(2**k)
    u = np.full(c, 1.0 / c)
    dp = float(np.abs(u - p).sum())
    nz = p[p > 0]
    dh = float(math.log2(c) - (-(nz * np.log2(nz)).sum()))
    return sizes, dp, dh


@pytest.mark.parametrize("k", range(1, 13))
def test_closed_form_matches_enumeration_for_small_widths(k):
    for c in range(1, 13):
        sizes, dp, dh = _enumerated_bias(c, k)
        record = choice_bias(c, k)
        assert record.dp == pytest.approx(dp, abs=1e-12)
        assert record.dh == pytest.approx(dh, abs=1e-12)
        expected = sorted(int(s) for s in sizes)
        closed = sorted(size for size, count in choice_partition(c, k) for _ in range(count))
        assert closed == expected


def test_partition_sizes_cover_all_codon_values():
    for c in (3, 5, 7, 41):
        for k in (8, 31, 64):
            parts = choice_partition(c, k)
            assert sum(size * count for size, count in parts) == 2**k
            assert sum(count for _, count in parts) == c


def test_bias_zero_when_choice_count_divides_codon_range():
    for k in range(1, 65):
        for c in (1, 2, 4, 8, 16, 32):
            if c <= 2**k:
                record = choice_bias(c, k)
                assert record.dp == 0.0
                assert record.dh == 0.0


def test_bias_non_increasing_with_precision():
    for c in range(1, 43):
        dps = [choice_bias(c, k).dp for k in range(1, 65)]
        assert all(later <= earlier for earlier, later in zip(dps, dps[1:]))


def test_bias_exact_at_64_bits():
    record = choice_bias(3, 64)
    # r * (c - r) buckets deviate by 1/(c 2^k) each way
    assert record.dp == float(Fraction(4, 3 * 2**64))
    assert record.dh > 0.0
    assert record.dh < record.dp


def test_entropy_deviation_when_codon_range_smaller_than_choices():
    record = choice_bias(5, 2)
    # four values cover four of five alternatives, one never chosen
    assert record.dh == pytest.approx(math.log2(5) - 2.0)
    assert record.dp == pytest.approx(0.4)


def test_bias_is_idempotent():
    first = choice_bias(5, 16)
    choice_bias.cache_clear()
    second = choice_bias(5, 16)
    assert first == second
    assert isinstance(second, BiasRecord)


def test_codon_choice_biases_table():
    rows = [r.as_row() for r in codon_choice_biases((1, 2, 3, 5), 3)]
    assert [row["Choices"] for row in rows] == [1, 2, 3, 5]
    assert all(row["Bits"] == 3 for row in rows)
    assert rows[0]["dp"] == 0.0 and rows[1]["dp"] == 0.0
    assert rows[2]["dp"] == pytest.approx(1.0 / 6.0)
    assert rows[3]["dp"] == pytest.approx(0.3)


@pytest.mark.parametrize("c", [0, -1, 2.5, True])
def test_bias_rejects_invalid_choice_counts(c):
    with pytest.raises(ConfigurationError):
        choice_bias(c, 8)


def test_bias_rejects_invalid_precision():
    with pytest.raises(ConfigurationError):
        choice_bias(3, 65)
