"""Rounding used for every integer the engine reports."""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves rounded up.

    Python's round() uses banker's rounding (64.5 -> 64); reported scores
    round 64.5 up to 65.
    """
    return math.floor(value + 0.5)
