# solver/errors.py


class CuttingStockError(Exception):
    """Base class for every error raised while solving a cutting stock instance."""


class InvalidPatternError(CuttingStockError):
    """A pattern breaks the roll-width capacity (or has negative / mismatched counts)."""


class InfeasibleSeedError(CuttingStockError):
    """The seed patterns cannot cover the demand of at least one order width."""


class SolverError(CuttingStockError):
    """
    The LP/MIP oracle reported infeasible, unbounded or an error on a call
    that is expected to always have an optimal solution.
    """

    def __init__(self, message, status=None):
        super().__init__(message)
        self.status = status


class IterationLimitError(CuttingStockError):
    """Column generation hit its iteration cap before converging."""


class NumericalStallWarning(RuntimeWarning):
    """Columns keep being added but the master objective no longer moves."""
