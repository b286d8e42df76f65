# scripts/compare_heuristics.py

import argparse
import logging
import pickle

from evaluation.evaluate_solver import evaluate_instances
from evaluation.metrics import summarize_csv_performance
from solver.oracle import ORACLES


def main(argv=None):
    parser = argparse.ArgumentParser(description="Compare rounding and restricted branch-and-bound")
    parser.add_argument("instances", nargs="?", default="test_instances.pkl")
    parser.add_argument("--backend", action="append", choices=sorted(ORACLES))
    parser.add_argument("--pricing", choices=["ilp", "dp"], default="ilp")
    parser.add_argument("--output", default="heuristic_comparison.csv")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    # load test instances
    with open(args.instances, "rb") as f:
        instances = pickle.load(f)

    evaluate_instances(instances, backends=args.backend or ["gurobi"],
                       use_ilp_pricing=args.pricing == "ilp", output_csv=args.output)
    for backend, stats in summarize_csv_performance(args.output).items():
        print(f"{backend}: " + ", ".join(f"{k}={v:.3f}" for k, v in stats.items()))
    print(f"Evaluation done. See {args.output}")


if __name__ == "__main__":
    main()
