# solver/oracle.py

import logging
import math
from collections import namedtuple

import gurobipy as gp
from gurobipy import GRB
import pulp

log = logging.getLogger(__name__)

OPTIMAL = "OPTIMAL"
INFEASIBLE = "INFEASIBLE"
UNBOUNDED = "UNBOUNDED"
ERROR = "ERROR"

OracleResult = namedtuple("OracleResult", ["status", "primal", "dual", "objective", "message"],
                          defaults=(None, None, None, ""))
"""
status: one of OPTIMAL, INFEASIBLE, UNBOUNDED, ERROR
primal: list of variable values (None unless OPTIMAL)
dual: list of row prices for LP solves, None for integer solves
objective: optimal objective value
message: free text from the backend, mostly useful when status != OPTIMAL
"""


class SolverOracle:
    """
    Base class for the LP/MIP engines the column generation core talks to.
    Every problem has the same shape:

        minimize    objective . x
        subject to  matrix[i] . x >= rhs[i]       for every row i
                    lower_bounds <= x <= upper_bounds   (defaults 0 / +inf)

    matrix is a list of rows. Subclasses must implement solve_linear_program
    and, if supports_integer is set, solve_integer_program.
    """
    name = "abstract"
    supports_integer = False
    supports_warm_start = False

    def solve_linear_program(self, objective, matrix, rhs, lower_bounds=None, upper_bounds=None):
        raise NotImplementedError

    def solve_integer_program(self, objective, matrix, rhs, lower_bounds=None, upper_bounds=None):
        raise NotImplementedError


def _bounds(n, lower_bounds, upper_bounds):
    lbs = [0.0] * n if lower_bounds is None else list(lower_bounds)
    ubs = [math.inf] * n if upper_bounds is None else list(upper_bounds)
    return lbs, ubs


class GurobiOracle(SolverOracle):
    """
    Gurobi backend. LP calls keep their model around: if the next call has the
    same rows and right-hand side and only appends columns, the new columns are
    added with gp.Column and Gurobi restarts from the previous basis.
    """
    name = "gurobi"
    supports_integer = True
    supports_warm_start = True

    def __init__(self, params=None, warm_start=True):
        """
        params: dict of Gurobi parameters, e.g. {"TimeLimit": 30, "Threads": 1}
        warm_start: if False, every LP is built from scratch.
        """
        self.params = {"OutputFlag": 0}
        self.params.update(params or {})
        self.warm_start = warm_start
        self._lp = None  # (model, constrs, vars, rhs, columns, objective)

    def _new_model(self, name):
        m = gp.Model(name)
        for key, val in self.params.items():
            m.setParam(key, val)
        return m

    def solve_linear_program(self, objective, matrix, rhs, lower_bounds=None, upper_bounds=None):
        n = len(objective)
        columns = [tuple(row[j] for row in matrix) for j in range(n)]
        try:
            plain_bounds = lower_bounds is None and upper_bounds is None
            if self.warm_start and plain_bounds and self._can_extend(objective, columns, rhs):
                m, constrs, x_vars = self._extend(objective, columns)
            else:
                if self.warm_start and self._lp is not None:
                    log.debug("warm start not possible, rebuilding the LP from scratch")
                m, constrs, x_vars = self._build(objective, matrix, rhs, lower_bounds, upper_bounds,
                                                 GRB.CONTINUOUS)
                if self.warm_start and plain_bounds:
                    self._lp = (m, constrs, x_vars, tuple(rhs), tuple(columns), tuple(objective))
                else:
                    self._lp = None
            self._optimize(m)
            result = self._result(m, x_vars)
            if result.status != OPTIMAL:
                return result
            return result._replace(dual=[c.Pi for c in constrs])
        except gp.GurobiError as e:
            self._lp = None
            return OracleResult(ERROR, message=f"Gurobi error {e.errno}: {e}")

    def solve_integer_program(self, objective, matrix, rhs, lower_bounds=None, upper_bounds=None):
        try:
            m, _, x_vars = self._build(objective, matrix, rhs, lower_bounds, upper_bounds, GRB.INTEGER)
            self._optimize(m)
            return self._result(m, x_vars)
        except gp.GurobiError as e:
            return OracleResult(ERROR, message=f"Gurobi error {e.errno}: {e}")

    def _build(self, objective, matrix, rhs, lower_bounds, upper_bounds, vtype):
        n = len(objective)
        lbs, ubs = _bounds(n, lower_bounds, upper_bounds)
        m = self._new_model("lp" if vtype == GRB.CONTINUOUS else "mip")
        x_vars = []
        for j in range(n):
            ub = GRB.INFINITY if math.isinf(ubs[j]) else ubs[j]
            x_vars.append(m.addVar(lb=lbs[j], ub=ub, vtype=vtype, obj=objective[j], name=f"x_{j}"))
        constrs = []
        for i, row in enumerate(matrix):
            expr = gp.quicksum(row[j] * x_vars[j] for j in range(n) if row[j] != 0)
            constrs.append(m.addConstr(expr >= rhs[i], name=f"row_{i}"))
        m.ModelSense = GRB.MINIMIZE
        return m, constrs, x_vars

    def _can_extend(self, objective, columns, rhs):
        if self._lp is None:
            return False
        old_rhs, old_columns, old_objective = self._lp[3:]
        k = len(old_columns)
        return (tuple(rhs) == old_rhs
                and len(columns) >= k
                and tuple(columns[:k]) == old_columns
                and tuple(objective[:k]) == old_objective)

    def _extend(self, objective, columns):
        m, constrs, x_vars, rhs, old_columns, _ = self._lp
        k = len(old_columns)
        for j in range(k, len(columns)):
            col = gp.Column(list(columns[j]), constrs)
            x_vars.append(m.addVar(lb=0.0, ub=GRB.INFINITY, obj=objective[j],
                                   vtype=GRB.CONTINUOUS, name=f"x_{j}", column=col))
        if len(columns) > k:
            log.debug("warm start: appended %d column(s) to a %d-column LP", len(columns) - k, k)
        self._lp = (m, constrs, x_vars, rhs, tuple(columns), tuple(objective))
        return m, constrs, x_vars

    @staticmethod
    def _optimize(m):
        m.optimize()
        if m.Status == GRB.INF_OR_UNBD:
            # presolve could not tell which; ask again without dual reductions
            m.setParam("DualReductions", 0)
            m.optimize()

    @staticmethod
    def _result(m, x_vars):
        if m.Status == GRB.OPTIMAL:
            return OracleResult(OPTIMAL, primal=[v.X for v in x_vars], objective=m.ObjVal)
        if m.Status == GRB.INFEASIBLE:
            return OracleResult(INFEASIBLE, message="model is infeasible")
        if m.Status == GRB.UNBOUNDED:
            return OracleResult(UNBOUNDED, message="model is unbounded")
        if m.Status == GRB.INF_OR_UNBD:
            return OracleResult(INFEASIBLE, message="model is infeasible or unbounded")
        return OracleResult(ERROR, message=f"Gurobi stopped with status {m.Status}")


class PulpOracle(SolverOracle):
    """
    PuLP backend, CBC by default. Every call builds a fresh LpProblem.
    """
    name = "pulp"
    supports_integer = True
    supports_warm_start = False

    def __init__(self, solver=None, params=None):
        """
        solver: a PuLP solver command, defaults to the bundled CBC.
        params: keyword arguments for PULP_CBC_CMD when solver is None (timeLimit, threads, ...)
        """
        if solver is None:
            kwargs = {"msg": False}
            kwargs.update(params or {})
            solver = pulp.PULP_CBC_CMD(**kwargs)
        self.solver = solver

    def solve_linear_program(self, objective, matrix, rhs, lower_bounds=None, upper_bounds=None):
        return self._solve(objective, matrix, rhs, lower_bounds, upper_bounds, pulp.LpContinuous)

    def solve_integer_program(self, objective, matrix, rhs, lower_bounds=None, upper_bounds=None):
        return self._solve(objective, matrix, rhs, lower_bounds, upper_bounds, pulp.LpInteger)

    def _solve(self, objective, matrix, rhs, lower_bounds, upper_bounds, cat):
        n = len(objective)
        lbs, ubs = _bounds(n, lower_bounds, upper_bounds)
        prob = pulp.LpProblem("oracle", pulp.LpMinimize)
        x_vars = [pulp.LpVariable(f"x_{j}", lowBound=lbs[j],
                                  upBound=None if math.isinf(ubs[j]) else ubs[j], cat=cat)
                  for j in range(n)]
        prob += pulp.lpSum(objective[j] * x_vars[j] for j in range(n))

        row_names = []
        for i, row in enumerate(matrix):
            terms = [(x_vars[j], row[j]) for j in range(n) if row[j] != 0]
            if not terms:
                # 0 >= rhs[i]
                if rhs[i] > 0:
                    return OracleResult(INFEASIBLE, message=f"row {i} has no coefficients but rhs {rhs[i]}")
                row_names.append(None)
                continue
            name = f"row_{i}"
            prob += pulp.LpAffineExpression(terms) >= rhs[i], name
            row_names.append(name)

        try:
            prob.solve(self.solver)
        except pulp.PulpSolverError as e:
            return OracleResult(ERROR, message=str(e))

        if prob.status == pulp.LpStatusInfeasible:
            return OracleResult(INFEASIBLE, message="model is infeasible")
        if prob.status == pulp.LpStatusUnbounded:
            return OracleResult(UNBOUNDED, message="model is unbounded")
        if prob.status != pulp.LpStatusOptimal:
            return OracleResult(ERROR, message=f"PuLP status {pulp.LpStatus[prob.status]}")

        primal = [v.varValue if v.varValue is not None else 0.0 for v in x_vars]
        objective_value = pulp.value(prob.objective)
        if objective_value is None:
            objective_value = 0.0
        dual = None
        if cat == pulp.LpContinuous:
            dual = []
            for name in row_names:
                pi = prob.constraints[name].pi if name is not None else None
                dual.append(pi if pi is not None else 0.0)
        return OracleResult(OPTIMAL, primal=primal, dual=dual, objective=objective_value)


ORACLES = {
    "gurobi": GurobiOracle,
    "pulp": PulpOracle,
}


def make_oracle(name, **kwargs):
    """Build an oracle by backend name ("gurobi" or "pulp")."""
    try:
        cls = ORACLES[name]
    except KeyError:
        raise ValueError(f"Unknown solver backend {name!r}, expected one of {sorted(ORACLES)}")
    return cls(**kwargs)
