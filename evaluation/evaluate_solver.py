# evaluation/evaluate_solver.py

import csv
import time

from solver.cutting_stock_solver import solve_instance
from solver.oracle import make_oracle
from .report import lower_bound

FIELDS = ["instance_id", "backend", "pricing", "time", "iterations", "patterns",
          "lp_obj", "lower_bound", "rounding", "branch_and_bound"]


def evaluate_instances(instances, backends=("gurobi",), use_ilp_pricing=True, settings=None,
                       output_csv="heuristic_comparison.csv"):
    """
    instances: list of instance dicts
    backends: oracle names to run every instance with
    output_csv: path to store results, None to skip writing
    We measure time, iterations, pattern count, and both integer totals.
    """
    results = []
    for idx, inst in enumerate(instances):
        for backend in backends:
            oracle = make_oracle(backend)
            start_t = time.time()
            res = solve_instance(inst, oracle=oracle, settings=settings, use_ilp_pricing=use_ilp_pricing)
            run_time = time.time() - start_t
            results.append({
                "instance_id": idx,
                "backend": backend,
                "pricing": "ilp" if use_ilp_pricing else "dp",
                "time": run_time,
                "iterations": len(res.history),
                "patterns": len(res.patterns),
                "lp_obj": res.relaxation.total_rolls,
                "lower_bound": lower_bound(res),
                "rounding": res.rounding.total_rolls,
                "branch_and_bound": res.branch_and_bound.total_rolls,
            })
    if output_csv:
        with open(output_csv, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=FIELDS)
            writer.writeheader()
            for r in results:
                writer.writerow(r)
    return results
