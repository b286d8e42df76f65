# scripts/generate_data.py

import argparse
import pickle

from data.generator import generate_multiple_instances


def main(argv=None):
    parser = argparse.ArgumentParser(description="Generate random cutting stock instances")
    parser.add_argument("--count", type=int, default=10)
    parser.add_argument("--num-widths", type=int, default=8)
    parser.add_argument("--roll-width", type=int, default=100)
    parser.add_argument("--min-width", type=int, default=5)
    parser.add_argument("--max-width", type=int, default=50)
    parser.add_argument("--min-demand", type=int, default=10)
    parser.add_argument("--max-demand", type=int, default=200)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--output", default="test_instances.pkl")
    args = parser.parse_args(argv)

    instances = generate_multiple_instances(
        count=args.count,
        seed=args.seed,
        num_widths=args.num_widths,
        roll_width=args.roll_width,
        min_width=args.min_width,
        max_width=args.max_width,
        min_demand=args.min_demand,
        max_demand=args.max_demand,
    )
    with open(args.output, "wb") as f:
        pickle.dump(instances, f)
    print(f"Saved {len(instances)} instances to {args.output}")


if __name__ == "__main__":
    main()
