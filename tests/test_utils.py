from __future__ import annotations

import math

import pytest

from game.minishooter.entities import Bullet, Enemy, Player
from game.minishooter.utils import clamp, display_time, intersects


def test_clamp() -> None:
    assert clamp(-5, 0, 10) == 0
    assert clamp(15, 0, 10) == 10
    assert clamp(3, 0, 10) == 3


def test_overlapping_boxes_intersect() -> None:
    a = Enemy(x=100, y=100, w=40, h=40)
    b = Bullet(x=110, y=110)
    assert intersects(a, b)
    assert intersects(b, a)


def test_separate_boxes_do_not_intersect() -> None:
    a = Enemy(x=0, y=0, w=30, h=30)
    b = Enemy(x=200, y=200, w=30, h=30)
    assert not intersects(a, b)


def test_grazing_contact_within_buffer_is_ignored() -> None:
    a = Enemy(x=0, y=0, w=40, h=40)
    # Overlaps by exactly 5 units horizontally
    b = Enemy(x=35, y=0, w=40, h=40)
    assert not intersects(a, b)
    # Overlaps by 6 units
    c = Enemy(x=34, y=0, w=40, h=40)
    assert intersects(a, c)


def test_zero_buffer_counts_any_overlap() -> None:
    a = Enemy(x=0, y=0, w=40, h=40)
    b = Enemy(x=39, y=0, w=40, h=40)
    assert intersects(a, b, buffer=0)
    assert not intersects(a, b)


@pytest.mark.parametrize(
    "box",
    [
        Enemy(x=10, y=10, w=0, h=20),
        Enemy(x=10, y=10, w=20, h=-5),
        Enemy(x=math.nan, y=10, w=20, h=20),
        Enemy(x=10, y=math.inf, w=20, h=20),
    ],
)
def test_degenerate_boxes_never_intersect(box) -> None:
    big = Player(x=0, y=0, w=500, h=500)
    assert not intersects(box, big)
    assert not intersects(big, box)


@pytest.mark.parametrize(
    "seconds, shown",
    [(60.0, 60), (59.15, 60), (0.01, 1), (0.0, 0), (-3.0, 0), (math.nan, 0)],
)
def test_display_time_rounds_up(seconds, shown) -> None:
    assert display_time(seconds) == shown
