# data/generator.py

import random

from .instances import make_instance


def generate_random_instance(num_widths, roll_width, min_width=1, max_width=None,
                             min_demand=1, max_demand=10, seed=None):
    """
    Random instance with distinct integer widths in [min_width, max_width]
    and homogeneous seed patterns. seed makes it reproducible without touching
    the global random state.
    """
    rng = random.Random(seed)
    if max_width is None:
        max_width = roll_width
    # ensure width <= roll_width
    max_width = min(max_width, roll_width)
    if max_width - min_width + 1 < num_widths:
        raise ValueError("width range too small for that many distinct widths")
    widths = sorted(rng.sample(range(min_width, max_width + 1), num_widths))
    demands = [rng.randint(min_demand, max_demand) for _ in widths]
    return make_instance(roll_width, widths, demands)


def generate_multiple_instances(count=10, seed=None, **kwargs):
    """
    count instances; instance k uses seed + k when seed is given.
    """
    instances = []
    for k in range(count):
        inst_seed = None if seed is None else seed + k
        inst = generate_random_instance(seed=inst_seed, **kwargs)
        instances.append(inst)
    return instances
