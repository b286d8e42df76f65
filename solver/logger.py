# solver/logger.py

import csv
import time
from collections import Counter


class SolverLogger:
    """
    Logs column generation events (master solves, added columns, convergence,
    integer recovery) to CSV, one row per event with the time since open().

    Can be used as a context manager:
      with SolverLogger("run.csv") as log:
          controller = ColumnGenerationController(..., logger=log)

    CuttingStockSolver opens and closes the logger itself only when it is
    not already open.
    """
    HEADER = ["timestamp", "event", "iteration", "lp_obj", "details"]

    def __init__(self, log_file="solver_log.csv"):
        self.log_file = log_file
        self.file_handle = None
        self.csv_writer = None
        self.start_time = time.time()
        self.counts = Counter()

    def open(self):
        self.start_time = time.time()
        self.counts.clear()
        self.file_handle = open(self.log_file, "w", newline="")
        self.csv_writer = csv.writer(self.file_handle)
        self.csv_writer.writerow(self.HEADER)

    def close(self):
        if self.file_handle:
            self.file_handle.close()
            self.file_handle = None
            self.csv_writer = None

    def log_event(self, event, iteration, lp_obj, details=""):
        if not self.csv_writer:
            return
        self.counts[event] += 1
        t = time.time() - self.start_time
        self.csv_writer.writerow([f"{t:.3f}", event, iteration, lp_obj, details])
        self.file_handle.flush()

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def __del__(self):
        self.close()
