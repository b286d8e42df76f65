# solver/column_generation.py

import logging
import warnings
from collections import namedtuple

from .errors import IterationLimitError, NumericalStallWarning
from .master_problem import MasterProblem
from .pricing import PricingSubproblem
from .solution import LP_RELAXATION, Solution

log = logging.getLogger(__name__)

INIT = "INIT"
MASTER_SOLVE = "MASTER_SOLVE"
PRICE = "PRICE"
ADD_COLUMN = "ADD_COLUMN"
CONVERGED = "CONVERGED"

ColumnGenerationSettings = namedtuple("ColumnGenerationSettings",
                                      ["epsilon", "max_iterations", "stall_iterations"],
                                      defaults=(1e-6, 1000, 25))
"""
epsilon: tolerance for the reduced cost test and the stall check
max_iterations: master solves allowed before IterationLimitError
stall_iterations: consecutive non-improving column additions before a NumericalStallWarning
"""

IterationRecord = namedtuple("IterationRecord",
                             ["iteration", "objective", "pricing_value", "reduced_cost", "pattern", "added"])

ColumnGenerationResult = namedtuple("ColumnGenerationResult",
                                    ["patterns", "relaxation", "duals", "history"])
"""
patterns: tuple of Patterns, index = master variable
relaxation: Solution with the LP-optimal usage
duals: dual prices of the final master solve
history: list of IterationRecord
"""


class ColumnGenerationController:
    """
    Drives the master / pricing loop:

      INIT -> MASTER_SOLVE -> PRICE -> (ADD_COLUMN -> MASTER_SOLVE) | CONVERGED

    A priced pattern is added only if its reduced cost 1 - value is below
    -epsilon; otherwise the current master solution is LP-optimal over all
    patterns.
    """

    def __init__(self, roll_width, widths, demands, seed_patterns, oracle,
                 settings=None, use_ilp_pricing=True, logger=None):
        """
        roll_width: capacity of each stock roll
        widths: list of order widths
        demands: list of demands for each order width
        seed_patterns: count vectors that cover every width with positive demand
        oracle: SolverOracle for the master LP and the ILP pricing
        settings: ColumnGenerationSettings
        use_ilp_pricing: if True pricing solves an ILP through the oracle; else DP.
        logger: optional SolverLogger for structured logging
        """
        self.settings = settings or ColumnGenerationSettings()
        self.logger = logger
        self.state = INIT
        self.master = MasterProblem(widths, demands, roll_width, oracle)
        self.master.initialize(seed_patterns)
        self.pricing = PricingSubproblem(widths, roll_width, oracle, use_ilp=use_ilp_pricing)
        self.history = []

    def run(self):
        eps = self.settings.epsilon
        stall_count = 0
        stall_warned = False
        prev_obj = None
        iteration = 0

        while True:
            iteration += 1
            if iteration > self.settings.max_iterations:
                raise IterationLimitError(
                    f"column generation did not converge within {self.settings.max_iterations} iterations "
                    f"({self.master.num_columns} patterns)")

            self.state = MASTER_SOLVE
            lp = self.master.solve_lp()
            if self.logger:
                self.logger.log_event("MasterSolved", iteration, lp.objective,
                                      f"patterns={self.master.num_columns}")

            # prev_obj is only set when the previous iteration added a column
            if prev_obj is not None:
                if lp.objective > prev_obj - eps:
                    stall_count += 1
                else:
                    stall_count = 0
                if stall_count >= self.settings.stall_iterations and not stall_warned:
                    msg = (f"master objective stuck at {lp.objective:.6f} for {stall_count} "
                           f"column additions (iteration {iteration}); possible degeneracy")
                    log.warning(msg)
                    warnings.warn(msg, NumericalStallWarning, stacklevel=2)
                    stall_warned = True

            self.state = PRICE
            priced = self.pricing.price(lp.duals)
            improving = priced.value > 1.0 + eps
            self.history.append(IterationRecord(iteration, lp.objective, priced.value,
                                                priced.reduced_cost, priced.pattern, improving))
            log.debug("iteration %d: obj=%.6f pricing=%.6f pattern=%s", iteration, lp.objective,
                      priced.value, list(priced.pattern))

            if not improving:
                self.state = CONVERGED
                if self.logger:
                    self.logger.log_event("Converged", iteration, lp.objective,
                                          f"reduced_cost={priced.reduced_cost:.6g}")
                break

            self.state = ADD_COLUMN
            j = self.master.add_column(priced.pattern)
            if self.logger:
                self.logger.log_event("ColumnAdded", iteration, lp.objective,
                                      f"index={j}, pattern={list(priced.pattern)}, "
                                      f"reduced_cost={priced.reduced_cost:.6g}")
            prev_obj = lp.objective

        relaxation = Solution(LP_RELAXATION, dict(lp.primal), lp.objective)
        return ColumnGenerationResult(self.master.patterns, relaxation, lp.duals, list(self.history))
