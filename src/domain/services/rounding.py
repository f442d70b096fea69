"""Rounding helpers shared by the impact-scoring stages."""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves rounded up (2.5 -> 3).

    Python's built-in round() rounds halves to even, which would shift the
    customer and downtime estimates at exact .5 boundaries.
    """
    return math.floor(value + 0.5)
