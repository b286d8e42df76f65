# evaluation/tensorboard_trace.py

from torch.utils.tensorboard import SummaryWriter


class TensorBoardTrace:
    """
    Writes the convergence curve of a column generation run to TensorBoard:
    master objective, pricing value and pattern count per iteration, and the
    integer totals once the run is done.
    """
    def __init__(self, log_dir="runs/column_generation"):
        self.log_dir = log_dir
        self.writer = SummaryWriter(log_dir=log_dir)

    def write_history(self, history, num_seeds):
        added = 0
        for rec in history:
            self.writer.add_scalar("Master/Objective", rec.objective, rec.iteration)
            self.writer.add_scalar("Pricing/Value", rec.pricing_value, rec.iteration)
            self.writer.add_scalar("Pricing/ReducedCost", rec.reduced_cost, rec.iteration)
            self.writer.add_scalar("Master/Patterns", num_seeds + added, rec.iteration)
            if rec.added:
                added += 1

    def write_result(self, result, num_seeds):
        self.write_history(result.history, num_seeds)
        last = len(result.history)
        self.writer.add_scalar("Integer/Rounding", result.rounding.total_rolls, last)
        self.writer.add_scalar("Integer/BranchAndBound", result.branch_and_bound.total_rolls, last)

    def close(self):
        self.writer.close()
