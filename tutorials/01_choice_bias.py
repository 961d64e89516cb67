"""
Choice Bias Tutorial

Goals:
- Inspect the LCM table for common codon widths
- Tabulate the modulo-rule bias for a choice vector
- Pick the codon width that keeps every bias below a threshold
"""

from gecodon.precision.bias import codon_choice_biases
from gecodon.precision.lcm_table import t_lcm
from gecodon.precision.search import codon_precision
from gecodon.utils.observability import determinism_signature, precision_report


def main():
    for k in (8, 16, 32, 64):
        profile = t_lcm(k)
        print(f"bits={profile.k:2d} max_choices={profile.m:2d} lcm={profile.m_lcm}")

    cv = (1, 2, 3, 5)
    for precision in (3, 5, 8):
        for record in codon_choice_biases(cv, precision):
            print(record.as_row())

    for p_crit in (0.1, 0.01, 1e-6):
        print("p_crit:", p_crit, "precision:", codon_precision(cv, p_crit))

    lhs = ["A"] * 2 + ["B"] * 3 + ["C"] * 5
    report = precision_report(lhs, p_crit=0.01)
    print("strategies:", {name: s["precision"] for name, s in report["strategies"].items()})
    print("signature:", determinism_signature(report))


if __name__ == "__main__":
    main()
