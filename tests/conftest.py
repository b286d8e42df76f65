import copy

import pytest

from data.instances import REFERENCE_INSTANCE
from solver.oracle import INFEASIBLE, OPTIMAL, OracleResult, SolverOracle, make_oracle


@pytest.fixture(params=["gurobi", "pulp"])
def backend(request):
    return request.param


@pytest.fixture
def oracle(backend):
    return make_oracle(backend)


@pytest.fixture
def reference():
    return copy.deepcopy(REFERENCE_INSTANCE)


def enumerate_patterns(widths, roll_width):
    """Every count vector that fits on one roll, including all zeros."""
    patterns = []

    def rec(i, remaining, current):
        if i == len(widths):
            patterns.append(list(current))
            return
        k = 0
        while k * widths[i] <= remaining:
            current.append(k)
            rec(i + 1, remaining - k * widths[i], current)
            current.pop()
            k += 1

    rec(0, roll_width, [])
    return patterns


class ScriptedOracle(SolverOracle):
    """
    Fake backend: LP solves return the next scripted objective with fixed
    duals, integer solves return the next scripted primal vector. The last
    entry of each script repeats once it runs out.
    """
    name = "scripted"
    supports_integer = True

    def __init__(self, lp_objectives, ip_solutions, duals, lp_status=OPTIMAL, ip_status=OPTIMAL):
        self.lp_objectives = list(lp_objectives)
        self.ip_solutions = list(ip_solutions)
        self.duals = list(duals)
        self.lp_status = lp_status
        self.ip_status = ip_status
        self.lp_calls = 0
        self.ip_calls = 0

    @staticmethod
    def _next(script, k):
        return script[min(k, len(script) - 1)]

    def solve_linear_program(self, objective, matrix, rhs, lower_bounds=None, upper_bounds=None):
        k = self.lp_calls
        self.lp_calls += 1
        if self.lp_status != OPTIMAL:
            return OracleResult(self.lp_status, message="scripted failure")
        return OracleResult(OPTIMAL, primal=[1.0] * len(objective), dual=list(self.duals),
                            objective=self._next(self.lp_objectives, k))

    def solve_integer_program(self, objective, matrix, rhs, lower_bounds=None, upper_bounds=None):
        k = self.ip_calls
        self.ip_calls += 1
        if self.ip_status != OPTIMAL:
            return OracleResult(self.ip_status, message="scripted failure")
        primal = list(self._next(self.ip_solutions, k))
        return OracleResult(OPTIMAL, primal=primal, objective=sum(c * x for c, x in zip(objective, primal)))


@pytest.fixture
def infeasible_oracle():
    return ScriptedOracle([0.0], [[0]], [0.0], lp_status=INFEASIBLE, ip_status=INFEASIBLE)
