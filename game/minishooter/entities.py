"""
Game entity dataclasses

Coordinates are top-left based with y growing downward.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass
class _Box:
    x: float
    y: float
    w: float
    h: float

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def bottom(self) -> float:
        return self.y + self.h

    @property
    def center(self) -> Tuple[float, float]:
        return self.x + self.w / 2, self.y + self.h / 2


@dataclass
class Player(_Box):
    """Player ship, only moves horizontally"""
    w: float = 50.0
    h: float = 50.0


@dataclass
class Bullet(_Box):
    """Bullet projectile travelling upward"""
    w: float = 8.0
    h: float = 12.0
    speed: float = 800.0  # px/s


@dataclass
class Enemy(_Box):
    """Square enemy descending from the top edge"""
    speed: float = 120.0  # px/s

    @property
    def size(self) -> float:
        return self.w
