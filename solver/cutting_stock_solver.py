# solver/cutting_stock_solver.py

from collections import namedtuple

from .column_generation import ColumnGenerationController, ColumnGenerationSettings
from .heuristics import restricted_branch_and_bound, round_up
from .oracle import GurobiOracle

CuttingStockResult = namedtuple("CuttingStockResult",
                                ["patterns", "relaxation", "rounding", "branch_and_bound", "history", "duals"])


class CuttingStockSolver:
    """
    Column generation for the one-dimensional cutting stock problem, followed
    by two integer recovery heuristics on the final pattern set:
      - rounding every LP value up
      - branch-and-bound over the generated columns only (no pricing in the tree)
    """

    def __init__(self, roll_width, widths, demands, seed_patterns, oracle=None,
                 settings=None, use_ilp_pricing=True, logger=None):
        """
        roll_width: capacity of each stock roll
        widths: list of order widths
        demands: list of demands for each order width
        seed_patterns: initial patterns, must cut every width that has demand
        oracle: SolverOracle, a GurobiOracle if not given
        settings: ColumnGenerationSettings
        use_ilp_pricing: if True pricing solves an ILP through the oracle; else DP.
        logger: optional SolverLogger for structured logging
        """
        if roll_width <= 0:
            raise ValueError("roll width must be positive")
        if len(widths) != len(demands):
            raise ValueError("widths and demands must have the same length")
        if any(w <= 0 for w in widths):
            raise ValueError("order widths must be positive")
        if any(d < 0 for d in demands):
            raise ValueError("demands must be non-negative")
        self.roll_width = roll_width
        self.widths = list(widths)
        self.demands = list(demands)
        self.n = len(widths)
        self.seed_patterns = [list(p) for p in seed_patterns]
        self.oracle = oracle if oracle is not None else GurobiOracle()
        self.settings = settings or ColumnGenerationSettings()
        self.use_ilp_pricing = use_ilp_pricing
        self.logger = logger
        self.controller = None

    def solve(self):
        """
        Public entry point. Returns a CuttingStockResult; any error aborts the run.
        """
        # a logger the caller already opened stays open and keeps its rows
        owns_log = self.logger is not None and self.logger.file_handle is None
        if owns_log:
            self.logger.open()
        if self.logger:
            self.logger.log_event("SolverStart", 0, 0,
                                  f"roll_width={self.roll_width}, widths={len(self.widths)}, "
                                  f"oracle={self.oracle.name}")
        try:
            self.controller = ColumnGenerationController(
                self.roll_width, self.widths, self.demands, self.seed_patterns, self.oracle,
                settings=self.settings, use_ilp_pricing=self.use_ilp_pricing, logger=self.logger)
            cg = self.controller.run()

            rounding = round_up(cg.relaxation, cg.patterns, self.demands, self.settings.epsilon)
            if self.logger:
                self.logger.log_event("Rounding", len(cg.history), cg.relaxation.total_rolls,
                                      f"rolls={rounding.total_rolls}")

            bb = restricted_branch_and_bound(self.controller.master)
            if self.logger:
                self.logger.log_event("BranchAndBound", len(cg.history), cg.relaxation.total_rolls,
                                      f"rolls={bb.total_rolls}")
                self.logger.log_event("SolverEnd", len(cg.history), cg.relaxation.total_rolls,
                                      f"patterns={len(cg.patterns)}")
        finally:
            if owns_log:
                self.logger.close()

        return CuttingStockResult(cg.patterns, cg.relaxation, rounding, bb, cg.history, cg.duals)


def solve_instance(instance, **kwargs):
    """Convenience wrapper for an instance dict (see data.instances)."""
    solver = CuttingStockSolver(instance["roll_width"], instance["widths"], instance["demands"],
                                instance["seed_patterns"], **kwargs)
    return solver.solve()
