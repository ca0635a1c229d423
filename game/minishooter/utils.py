"""
Utility functions for game mechanics
"""

from __future__ import annotations
import math
import random
from typing import Optional
import numpy as np


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def _box_ok(r) -> bool:
    vals = (r.x, r.y, r.w, r.h)
    return all(math.isfinite(v) for v in vals) and r.w > 0 and r.h > 0


def intersects(a, b, buffer: float = 5.0) -> bool:
    """
    Check if two axis-aligned boxes overlap by more than `buffer` on both axes.

    Boxes expose x, y, w, h. Grazing contacts closer than the buffer do not
    count. Empty or malformed boxes never intersect.
    """
    if not (_box_ok(a) and _box_ok(b)):
        return False
    return (
        a.x + buffer < b.x + b.w
        and a.x + a.w - buffer > b.x
        and a.y + buffer < b.y + b.h
        and a.y + a.h - buffer > b.y
    )


def display_time(seconds: float) -> int:
    """Seconds remaining as shown on the HUD (rounded up)"""
    if not seconds > 0:
        return 0
    return int(math.ceil(seconds))


def seed_everything(py_seed: Optional[int]):
    """Seed all random number generators"""
    if py_seed is None:
        return
    random.seed(py_seed)
    np.random.seed(py_seed)
