import pytest

from solver.errors import InfeasibleSeedError, InvalidPatternError, SolverError
from solver.master_problem import MasterProblem


def make_master(reference, oracle):
    master = MasterProblem(reference["widths"], reference["demands"], reference["roll_width"], oracle)
    master.initialize(reference["seed_patterns"])
    return master


def test_initialize_builds_one_column_per_seed(reference, oracle):
    master = make_master(reference, oracle)
    assert master.num_columns == 2
    assert master.constraint_matrix() == [[1, 0], [1, 0], [0, 2], [1, 0]]


def test_constraint_columns_match_library(reference, oracle):
    master = make_master(reference, oracle)
    master.add_column([0, 3, 0, 0])
    matrix = master.constraint_matrix()
    for j, pat in enumerate(master.patterns):
        assert [row[j] for row in matrix] == list(pat)


def test_uncovered_width_is_infeasible_seed(reference, oracle):
    master = MasterProblem(reference["widths"], reference["demands"], reference["roll_width"], oracle)
    with pytest.raises(InfeasibleSeedError, match="45"):
        master.initialize([[1, 1, 0, 0], [0, 0, 2, 0]])
    assert master.num_columns == 0


def test_uncovered_width_without_demand_is_fine(oracle):
    master = MasterProblem([10, 20], [5, 0], 50, oracle)
    master.initialize([[5, 0]])
    lp = master.solve_lp()
    assert lp.objective == pytest.approx(1.0)


def test_initialize_twice_fails(reference, oracle):
    master = make_master(reference, oracle)
    with pytest.raises(RuntimeError):
        master.initialize(reference["seed_patterns"])


def test_first_master_solve(reference, oracle):
    lp = make_master(reference, oracle).solve_lp()
    assert lp.objective == pytest.approx(700.0)
    assert lp.primal[0] == pytest.approx(395.0)
    assert lp.primal[1] == pytest.approx(305.0)
    assert lp.duals == pytest.approx([0.0, 1.0, 0.5, 0.0])


def test_add_column_extends_model(reference, oracle):
    master = make_master(reference, oracle)
    master.solve_lp()
    assert master.add_column([0, 3, 0, 0]) == 2
    lp = master.solve_lp()
    assert master.num_columns == 3
    assert lp.objective == pytest.approx(577.3333, abs=1e-3)
    assert [list(p) for p in master.patterns[:2]] == reference["seed_patterns"]


def test_invalid_column_rejected(reference, oracle):
    master = make_master(reference, oracle)
    with pytest.raises(InvalidPatternError):
        master.add_column([0, 0, 0, 3])
    assert master.num_columns == 2


def test_solve_as_mip_leaves_master_untouched(reference, oracle):
    master = make_master(reference, oracle)
    master.add_column([0, 3, 0, 0])
    before = master.solve_lp()
    primal, objective = master.solve_as_mip()
    assert all(abs(v - round(v)) < 1e-6 for v in primal.values())
    assert objective >= before.objective - 1e-6
    assert master.num_columns == 3
    after = master.solve_lp()
    assert after.objective == pytest.approx(before.objective)


def test_oracle_failure_raises_solver_error(reference, infeasible_oracle):
    master = make_master(reference, infeasible_oracle)
    with pytest.raises(SolverError) as exc:
        master.solve_lp()
    assert exc.value.status == "INFEASIBLE"
    with pytest.raises(SolverError):
        master.solve_as_mip()


def test_length_mismatch(oracle):
    with pytest.raises(ValueError):
        MasterProblem([10, 20], [1], 50, oracle)


@pytest.mark.parametrize("roll_width, widths, demands", [
    (50, [10, 0], [1, 1]),
    (50, [10, -5], [1, 1]),
    (0, [10, 20], [1, 1]),
    (50, [10, 20], [1, -1]),
])
def test_bad_instance_rejected(oracle, roll_width, widths, demands):
    with pytest.raises(ValueError):
        MasterProblem(widths, demands, roll_width, oracle)
