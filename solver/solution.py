# solver/solution.py

from collections import namedtuple

Solution = namedtuple("Solution", ["method", "usage", "total_rolls"])
"""
method: "lp-relaxation", "rounding" or "restricted-branch-and-bound"
usage: dict {pattern_index: rolls cut with that pattern} (fractional for the LP)
total_rolls: sum of usage
"""

LP_RELAXATION = "lp-relaxation"
ROUNDING = "rounding"
RESTRICTED_BRANCH_AND_BOUND = "restricted-branch-and-bound"


def used_patterns(solution, patterns, epsilon=1e-6):
    """
    List of (pattern, usage) pairs with usage above epsilon, in column order.
    """
    return [(patterns[j], val) for j, val in sorted(solution.usage.items()) if val > epsilon]


def produced(solution, patterns, n):
    """Pieces produced per order width by the given usage."""
    totals = [0.0] * n
    for j, val in solution.usage.items():
        pat = patterns[j]
        for i in range(n):
            totals[i] += pat[i] * val
    return totals


def covers_demand(solution, patterns, demands, epsilon=1e-6):
    totals = produced(solution, patterns, len(demands))
    return all(t >= d - epsilon for t, d in zip(totals, demands))
