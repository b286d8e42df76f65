# scripts/run_solver.py

import argparse
import logging

from data.instances import REFERENCE_INSTANCE, load_instance
from evaluation.report import format_history, format_result
from solver.column_generation import ColumnGenerationSettings
from solver.cutting_stock_solver import solve_instance
from solver.logger import SolverLogger
from solver.oracle import ORACLES, make_oracle


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Cutting stock by column generation")
    parser.add_argument("instance", nargs="?", default=None,
                        help="instance file (.json or .pkl); the reference instance if omitted")
    parser.add_argument("--backend", choices=sorted(ORACLES), default="gurobi")
    parser.add_argument("--pricing", choices=["ilp", "dp"], default="ilp")
    parser.add_argument("--epsilon", type=float, default=1e-6)
    parser.add_argument("--max-iterations", type=int, default=1000)
    parser.add_argument("--log-file", default=None, help="CSV event log")
    parser.add_argument("--tensorboard-dir", default=None, help="write the convergence trace here")
    parser.add_argument("--trace", action="store_true", help="print the iteration table")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    inst = load_instance(args.instance) if args.instance else REFERENCE_INSTANCE
    settings = ColumnGenerationSettings(epsilon=args.epsilon, max_iterations=args.max_iterations)
    logger = SolverLogger(args.log_file) if args.log_file else None

    result = solve_instance(inst, oracle=make_oracle(args.backend), settings=settings,
                            use_ilp_pricing=args.pricing == "ilp", logger=logger)

    if args.trace:
        print(format_history(result.history))
        print()
    print(format_result(result, inst["widths"], inst["demands"], inst["roll_width"], args.epsilon))

    if args.tensorboard_dir:
        from evaluation.tensorboard_trace import TensorBoardTrace
        trace = TensorBoardTrace(args.tensorboard_dir)
        trace.write_result(result, len(inst["seed_patterns"]))
        trace.close()
        logging.info("convergence trace written to %s", args.tensorboard_dir)


if __name__ == "__main__":
    main()
