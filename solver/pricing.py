# solver/pricing.py

import math
from collections import namedtuple

from .errors import SolverError
from .oracle import OPTIMAL
from .pattern import Pattern


class PricingResult(namedtuple("PricingResult", ["pattern", "value"])):
    """
    pattern: best Pattern for the current duals
    value: sum(duals[i] * pattern[i]), the knapsack optimum
    """
    __slots__ = ()

    @property
    def reduced_cost(self):
        # every master column costs exactly one roll
        return 1.0 - self.value


class PricingSubproblem:
    """
    Pricing subproblem for the cutting stock master, generating patterns
    (columns) from dual prices:

        max  sum(duals[i] * a_i)
        s.t. sum(widths[i] * a_i) <= roll_width,   a_i >= 0 integer

    Example usage:
      pricing = PricingSubproblem(widths, roll_width, oracle)
      result = pricing.price(duals)
      if result.reduced_cost < -1e-6:
          # negative reduced cost => add result.pattern
    """

    def __init__(self, widths, roll_width, oracle=None, use_ilp=True):
        """
        widths: order widths
        roll_width: capacity of the stock roll
        oracle: SolverOracle used for the integer program
        use_ilp: if True solve the knapsack through the oracle; else use DP
                 (integral widths only).
        """
        self.widths = list(widths)
        self.roll_width = roll_width
        self.n = len(widths)
        self.oracle = oracle
        self.use_ilp = use_ilp
        if use_ilp and oracle is None:
            raise ValueError("ILP pricing needs a solver oracle")
        if not use_ilp and not self._integral():
            raise ValueError("DP pricing needs integral widths and roll width")

    def _integral(self):
        return all(float(w).is_integer() for w in self.widths + [self.roll_width])

    def price(self, duals):
        if len(duals) != self.n:
            raise ValueError(f"expected {self.n} dual prices, got {len(duals)}")
        if self.use_ilp:
            counts = self._price_ilp(duals)
        else:
            counts = self._price_dp(duals)
        pattern = Pattern(counts, self.widths, self.roll_width)
        value = math.fsum(d * a for d, a in zip(duals, pattern))
        return PricingResult(pattern, value)

    def _price_ilp(self, duals):
        """
        Knapsack in the oracle's "min c.x s.t. A x >= b" form:
          min  -duals . a
          s.t. -widths . a >= -roll_width
               0 <= a_i <= roll_width // widths[i]
        """
        objective = [-d for d in duals]
        matrix = [[-w for w in self.widths]]
        upper = [math.floor(self.roll_width / w) for w in self.widths]
        result = self.oracle.solve_integer_program(objective, matrix, [-self.roll_width],
                                                   upper_bounds=upper)
        if result.status != OPTIMAL:
            # a = 0 is always feasible, so this is a modelling or solver defect
            raise SolverError(f"pricing subproblem not solved to optimality: {result.status} "
                              f"{result.message}".strip(), status=result.status)
        return [int(round(v)) for v in result.primal]

    def _price_dp(self, duals):
        """
        Unbounded knapsack by dynamic programming over integer capacity.
        best[c] = best dual value with capacity c, choice[c] the last item added
        (-1 means capacity c is best left as waste).
        """
        cap = int(self.roll_width)
        lengths = [int(w) for w in self.widths]
        best = [0.0] * (cap + 1)
        choice = [-1] * (cap + 1)
        for c in range(1, cap + 1):
            best[c] = best[c - 1]
            choice[c] = -2  # inherit from c - 1
            for i in range(self.n):
                if duals[i] <= 0 or lengths[i] > c:
                    continue
                val = best[c - lengths[i]] + duals[i]
                if val > best[c]:
                    best[c] = val
                    choice[c] = i

        counts = [0] * self.n
        c = cap
        while c > 0:
            i = choice[c]
            if i == -2:
                c -= 1
            elif i >= 0:
                counts[i] += 1
                c -= lengths[i]
            else:
                break
        return counts
