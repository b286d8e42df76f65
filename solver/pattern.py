# solver/pattern.py

import math

from .errors import InvalidPatternError


def used_width(counts, widths):
    return math.fsum(w * a for w, a in zip(widths, counts))


class Pattern:
    """
    One way of cutting a single roll: counts[i] is how many pieces of order
    width i are cut from it. Patterns are immutable and compare by their
    count vector, so duplicates are allowed but easy to spot.

    Example:
      p = Pattern([1, 1, 0, 1], widths=[14, 31, 36, 45], roll_width=100)
      p.waste  # 10
    """

    __slots__ = ("_counts", "_used", "_roll_width")

    def __init__(self, counts, widths, roll_width):
        counts = tuple(counts)
        if len(counts) != len(widths):
            raise InvalidPatternError(
                f"pattern has {len(counts)} entries but there are {len(widths)} order widths")
        for c in counts:
            try:
                integral = c == int(c) and c >= 0
            except (TypeError, ValueError, OverflowError):
                integral = False
            if not integral:
                raise InvalidPatternError(f"pattern counts must be non-negative integers, got {counts}")
        counts = tuple(int(c) for c in counts)
        used = used_width(counts, widths)
        if used > roll_width:
            raise InvalidPatternError(
                f"pattern {list(counts)} uses width {used} > roll width {roll_width}")
        self._counts = counts
        self._used = used
        self._roll_width = roll_width

    @property
    def counts(self):
        return self._counts

    @property
    def used_width(self):
        return self._used

    @property
    def waste(self):
        return self._roll_width - self._used

    def __len__(self):
        return len(self._counts)

    def __iter__(self):
        return iter(self._counts)

    def __getitem__(self, i):
        return self._counts[i]

    def __eq__(self, other):
        if isinstance(other, Pattern):
            return self._counts == other._counts
        if isinstance(other, (list, tuple)):
            return self._counts == tuple(other)
        return NotImplemented

    def __hash__(self):
        return hash(self._counts)

    def __repr__(self):
        return f"Pattern({list(self._counts)})"


class PatternLibrary:
    """
    Append-only list of patterns. The position of a pattern is also the
    index of its variable in the master problem.
    """

    def __init__(self, widths, roll_width):
        self.widths = list(widths)
        self.roll_width = roll_width
        self._patterns = []

    def make(self, counts):
        """Validate a raw count vector against this library's widths and roll width."""
        if isinstance(counts, Pattern):
            counts = counts.counts
        return Pattern(counts, self.widths, self.roll_width)

    def add(self, pattern):
        pattern = self.make(pattern)
        self._patterns.append(pattern)
        return len(self._patterns) - 1

    def all(self):
        return tuple(self._patterns)

    def __len__(self):
        return len(self._patterns)

    def __getitem__(self, j):
        return self._patterns[j]

    def __iter__(self):
        return iter(self._patterns)

    def __contains__(self, counts):
        return any(p == counts for p in self._patterns)
