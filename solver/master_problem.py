# solver/master_problem.py

from collections import namedtuple

from .errors import InfeasibleSeedError, SolverError
from .oracle import OPTIMAL
from .pattern import PatternLibrary

LPSolution = namedtuple("LPSolution", ["objective", "primal", "duals"])
"""
objective: total (fractional) rolls
primal: dict {pattern_index: usage}
duals: list of demand-row prices, one per order width
"""


class MasterProblem:
    """
    Restricted master LP of the cutting stock problem:

        min  sum_j x_j
        s.t. sum_j pattern_j[i] * x_j >= demand_i   for every order width i
             x_j >= 0

    One variable per known pattern, one row per order width. Columns are only
    ever appended; the column list lives in a PatternLibrary, so column j of the
    constraint matrix is always library[j].
    """

    def __init__(self, widths, demands, roll_width, oracle):
        if roll_width <= 0:
            raise ValueError("roll width must be positive")
        if len(widths) != len(demands):
            raise ValueError("widths and demands must have the same length")
        if any(w <= 0 for w in widths):
            raise ValueError("order widths must be positive")
        if any(d < 0 for d in demands):
            raise ValueError("demands must be non-negative")
        self.widths = list(widths)
        self.demands = list(demands)
        self.roll_width = roll_width
        self.n = len(widths)
        self.oracle = oracle
        self.library = PatternLibrary(widths, roll_width)

    def initialize(self, seed_patterns):
        """
        Load the caller's seed patterns as the first columns. Every order width
        with positive demand must be cut by at least one seed, otherwise the
        master LP would be infeasible from the start.
        """
        if len(self.library) > 0:
            raise RuntimeError("master problem already initialized")
        seeds = [self.library.make(p) for p in seed_patterns]
        uncovered = [i for i in range(self.n)
                     if self.demands[i] > 0 and not any(p[i] > 0 for p in seeds)]
        if uncovered:
            missing = ", ".join(str(self.widths[i]) for i in uncovered)
            raise InfeasibleSeedError(f"no seed pattern cuts width(s) {missing}")
        for p in seeds:
            self.library.add(p)

    def add_column(self, pattern):
        return self.library.add(pattern)

    @property
    def patterns(self):
        return self.library.all()

    @property
    def num_columns(self):
        return len(self.library)

    def constraint_matrix(self):
        """Rows = order widths, columns = patterns."""
        return [[p[i] for p in self.library] for i in range(self.n)]

    def _objective(self):
        return [1.0] * len(self.library)

    def solve_lp(self):
        result = self.oracle.solve_linear_program(self._objective(), self.constraint_matrix(), self.demands)
        if result.status != OPTIMAL:
            raise SolverError(f"master LP not solved to optimality: {result.status} {result.message}".strip(),
                              status=result.status)
        primal = {j: v for j, v in enumerate(result.primal)}
        return LPSolution(result.objective, primal, list(result.dual))

    def solve_as_mip(self):
        """
        Same rows and columns, every x_j integer. The LP model state is left
        untouched. Returns (primal dict, objective).
        """
        result = self.oracle.solve_integer_program(self._objective(), self.constraint_matrix(), self.demands)
        if result.status != OPTIMAL:
            raise SolverError(f"restricted master MIP not solved to optimality: {result.status} "
                              f"{result.message}".strip(), status=result.status)
        primal = {j: v for j, v in enumerate(result.primal)}
        return primal, result.objective
