# solver/heuristics.py

import math

from .errors import SolverError
from .solution import RESTRICTED_BRANCH_AND_BOUND, ROUNDING, Solution, covers_demand


def round_up(relaxation, patterns, demands, epsilon=1e-6):
    """
    Ceil every LP usage value. All rows are ">= demand" and all pattern
    counts are non-negative, so raising any x_j can only add pieces: the
    rounded solution covers demand whenever the LP one does.

    Values within epsilon of an integer are snapped to it first, so LP noise
    like 198.0000000001 does not cost an extra roll.
    """
    usage = {}
    for j, val in relaxation.usage.items():
        nearest = round(val)
        count = int(nearest) if abs(val - nearest) <= epsilon else math.ceil(val)
        if count > 0:
            usage[j] = count
    solution = Solution(ROUNDING, usage, sum(usage.values()))
    if not covers_demand(solution, patterns, demands, epsilon):
        raise SolverError("rounded LP solution misses demand; the LP solution itself was not feasible")
    return solution


def restricted_branch_and_bound(master):
    """
    Solve the master over the columns it already has with x_j integer. The
    optimum is an upper bound on the true integer optimum (no new columns are
    priced inside the tree) and never worse than rounding up.
    """
    primal, _ = master.solve_as_mip()
    usage = {}
    for j, val in primal.items():
        count = int(round(val))
        if count > 0:
            usage[j] = count
    return Solution(RESTRICTED_BRANCH_AND_BOUND, usage, sum(usage.values()))
