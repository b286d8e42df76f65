# evaluation/metrics.py

import csv
import statistics


def summarize_csv_performance(csv_file):
    """
    Reads 'heuristic_comparison.csv' and computes average time, iterations and
    totals per backend, plus how often each heuristic reaches ceil(LP).
    """
    data = []
    with open(csv_file, "r") as f:
        reader = csv.DictReader(f)
        for row in reader:
            row["time"] = float(row["time"])
            row["iterations"] = int(row["iterations"])
            row["lp_obj"] = float(row["lp_obj"])
            row["lower_bound"] = int(row["lower_bound"])
            row["rounding"] = int(row["rounding"])
            row["branch_and_bound"] = int(row["branch_and_bound"])
            data.append(row)
    return summarize_rows(data)


def summarize_rows(rows):
    # group by backend
    backends = {}
    for row in rows:
        backends.setdefault(row["backend"], []).append(row)
    results = {}
    for b, group in backends.items():
        results[b] = {
            "avg_time": statistics.mean(r["time"] for r in group),
            "avg_iterations": statistics.mean(r["iterations"] for r in group),
            "avg_rounding_gap": statistics.mean(r["rounding"] - r["lower_bound"] for r in group),
            "avg_bb_gap": statistics.mean(r["branch_and_bound"] - r["lower_bound"] for r in group),
            "rounding_hits_bound": sum(1 for r in group if r["rounding"] == r["lower_bound"]) / len(group),
            "bb_hits_bound": sum(1 for r in group if r["branch_and_bound"] == r["lower_bound"]) / len(group),
        }
    return results
