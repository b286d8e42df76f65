import math

import pytest

from conftest import enumerate_patterns
from solver.errors import SolverError
from solver.pricing import PricingSubproblem

WIDTHS = [14, 31, 36, 45]

DUAL_VECTORS = [
    [0.0, 1.0, 0.5, 0.0],
    [0.142857, 0.333333, 0.5, 0.5],
    [0.1, 0.3, 0.35, 0.45],
    [0.25, 0.0, 0.0, 0.0],
    [0.0, 0.0, 0.0, 0.0],
]


def best_value(duals, widths=WIDTHS, roll_width=100):
    return max(math.fsum(d * a for d, a in zip(duals, p)) for p in enumerate_patterns(widths, roll_width))


@pytest.fixture(params=["ilp", "dp"])
def pricing(request, oracle):
    return PricingSubproblem(WIDTHS, 100, oracle, use_ilp=request.param == "ilp")


def test_first_reference_pricing(pricing):
    res = pricing.price([0.0, 1.0, 0.5, 0.0])
    assert res.pattern == [0, 3, 0, 0]
    assert res.value == pytest.approx(3.0)
    assert res.reduced_cost == pytest.approx(-2.0)


@pytest.mark.parametrize("duals", DUAL_VECTORS)
def test_matches_exhaustive_search(pricing, duals):
    res = pricing.price(duals)
    assert res.value == pytest.approx(best_value(duals), abs=1e-6)
    assert res.pattern.used_width <= 100


def test_zero_duals_give_no_improvement(pricing):
    res = pricing.price([0.0] * 4)
    assert res.value == 0.0
    assert res.reduced_cost == 1.0


def test_wrong_dual_length(pricing):
    with pytest.raises(ValueError):
        pricing.price([1.0, 1.0])


def test_dp_needs_integral_widths():
    with pytest.raises(ValueError):
        PricingSubproblem([14.5, 31], 100, use_ilp=False)


def test_ilp_needs_oracle():
    with pytest.raises(ValueError):
        PricingSubproblem(WIDTHS, 100)


def test_ilp_handles_fractional_widths(oracle):
    pricing = PricingSubproblem([2.5, 4.0], 10.0, oracle)
    res = pricing.price([0.3, 0.5])
    # 4 x 2.5 -> 1.2, 2 x 2.5 + 1 x 4.0 -> 1.1, 2 x 4.0 -> 1.0
    assert res.pattern == [4, 0]
    assert res.value == pytest.approx(1.2)


def test_infeasible_pricing_is_fatal(infeasible_oracle):
    pricing = PricingSubproblem(WIDTHS, 100, infeasible_oracle)
    with pytest.raises(SolverError):
        pricing.price([0.0, 1.0, 0.5, 0.0])
