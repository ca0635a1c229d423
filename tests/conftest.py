from __future__ import annotations

import pytest

from game.minishooter.config import GameConfig
from game.minishooter.state import RoundState, start_round


class FixedRng:
    """Stand-in for `random` that always lands at the same fraction of a range."""

    def __init__(self, fraction: float = 0.5):
        self.fraction = fraction

    def uniform(self, a: float, b: float) -> float:
        return a + (b - a) * self.fraction


@pytest.fixture()
def cfg() -> GameConfig:
    return GameConfig()


@pytest.fixture()
def rng() -> FixedRng:
    return FixedRng(0.5)


@pytest.fixture()
def fixed_rng():
    """Factory for RNGs pinned to a fraction of every range."""
    return FixedRng


@pytest.fixture()
def state(cfg: GameConfig) -> RoundState:
    """A freshly started round."""
    s = RoundState.new(cfg)
    assert start_round(s, cfg)
    return s
