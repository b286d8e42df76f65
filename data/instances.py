# data/instances.py

import json
import math
import os
import pickle

REFERENCE_INSTANCE = {
    "roll_width": 100,
    "widths": [14, 31, 36, 45],
    "demands": [211, 395, 610, 97],
    "seed_patterns": [[1, 1, 0, 1], [0, 0, 2, 0]],
}


def homogeneous_patterns(roll_width, widths):
    """
    One seed pattern per width, cutting it as often as it fits. Together they
    cover every width whose size does not exceed the roll.
    """
    patterns = []
    for i, w in enumerate(widths):
        pat = [0] * len(widths)
        pat[i] = int(math.floor(roll_width / w))
        patterns.append(pat)
    return patterns


def make_instance(roll_width, widths, demands, seed_patterns=None):
    """
    Build and validate an instance dict. Without seed_patterns the homogeneous
    patterns are used.
    """
    if roll_width <= 0:
        raise ValueError("roll_width must be positive")
    if len(widths) != len(demands):
        raise ValueError("widths and demands must have the same length")
    for w in widths:
        if w <= 0 or w > roll_width:
            raise ValueError(f"order width {w} must be in (0, {roll_width}]")
    if any(d < 0 for d in demands):
        raise ValueError("demands must be non-negative")
    if seed_patterns is None:
        seed_patterns = homogeneous_patterns(roll_width, widths)
    return {
        "roll_width": roll_width,
        "widths": list(widths),
        "demands": list(demands),
        "seed_patterns": [list(p) for p in seed_patterns],
    }


def load_instance(path):
    """Read an instance from .json or .pkl and validate it."""
    ext = os.path.splitext(path)[1].lower()
    if ext == ".json":
        with open(path, "r") as f:
            raw = json.load(f)
    elif ext in (".pkl", ".pickle"):
        with open(path, "rb") as f:
            raw = pickle.load(f)
    else:
        raise ValueError(f"Unsupported instance format {ext!r} (use .json or .pkl)")
    return make_instance(raw["roll_width"], raw["widths"], raw["demands"], raw.get("seed_patterns"))


def save_instance(instance, path):
    ext = os.path.splitext(path)[1].lower()
    if ext == ".json":
        with open(path, "w") as f:
            json.dump(instance, f, indent=2)
    elif ext in (".pkl", ".pickle"):
        with open(path, "wb") as f:
            pickle.dump(instance, f)
    else:
        raise ValueError(f"Unsupported instance format {ext!r} (use .json or .pkl)")
