# evaluation/report.py

import math

from solver.solution import used_patterns


def lower_bound(result):
    """ceil of the LP relaxation, the best any integer solution can do."""
    return math.ceil(result.relaxation.total_rolls - 1e-9)


def format_solution(solution, patterns, widths, roll_width, epsilon=1e-6):
    lines = [f"[{solution.method}] total rolls = {solution.total_rolls:g}"]
    for pat, usage in used_patterns(solution, patterns, epsilon):
        pieces = " + ".join(f"{a}x{w}" for a, w in zip(pat, widths) if a > 0)
        waste = roll_width - pat.used_width
        lines.append(f"  {usage:10.3f} x {list(pat)}  ({pieces}, waste {waste:g})")
    return lines


def format_result(result, widths, demands, roll_width, epsilon=1e-6):
    """
    Text report for a CuttingStockResult: the LP relaxation, both integer
    solutions, and the gap of each integer solution to ceil(LP).
    """
    lb = lower_bound(result)
    lines = [
        f"roll width {roll_width:g}, {len(widths)} order widths, "
        f"{len(result.patterns)} patterns after {len(result.history)} iterations",
        "orders: " + ", ".join(f"{w:g}x{d:g}" for w, d in zip(widths, demands)),
        "",
    ]
    for sol in (result.relaxation, result.rounding, result.branch_and_bound):
        lines.extend(format_solution(sol, result.patterns, widths, roll_width, epsilon))
        lines.append("")
    lines.append(f"lower bound ceil(LP) = {lb}")
    for sol in (result.rounding, result.branch_and_bound):
        lines.append(f"  {sol.method}: {sol.total_rolls} rolls, gap {sol.total_rolls - lb}")
    return "\n".join(lines)


def format_history(history):
    lines = ["iter  master_obj  pricing_value  reduced_cost  pattern"]
    for rec in history:
        mark = "+" if rec.added else " "
        lines.append(f"{rec.iteration:4d}  {rec.objective:10.4f}  {rec.pricing_value:13.4f}  "
                     f"{rec.reduced_cost:12.4f} {mark}{list(rec.pattern)}")
    return "\n".join(lines)
