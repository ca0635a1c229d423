"""
Round state and the start / playing / ended state machine
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .config import GameConfig
from .entities import Player, Bullet, Enemy


class Phase(str, Enum):
    START = "start"
    PLAYING = "playing"
    ENDED = "ended"


@dataclass(frozen=True)
class Outcome:
    """Result attached to a transition into the ended phase"""
    won: bool
    score: int


@dataclass
class RoundState:
    """Everything a round mutates. Owned by the simulation step."""
    player: Player
    score: int = 0
    time_left: float = 60.0
    phase: Phase = Phase.START
    spawn_accumulator: float = 0.0
    fire_cooldown: float = 0.0
    bullets: List[Bullet] = field(default_factory=list)
    enemies: List[Enemy] = field(default_factory=list)
    outcome: Optional[Outcome] = None

    @classmethod
    def new(cls, cfg: GameConfig) -> "RoundState":
        player = Player(
            x=cfg.player_start_x,
            y=cfg.player_y,
            w=cfg.player_width,
            h=cfg.player_height,
        )
        return cls(player=player, time_left=cfg.round_time)

    @property
    def playing(self) -> bool:
        return self.phase is Phase.PLAYING


def start_round(state: RoundState, cfg: GameConfig) -> bool:
    """
    Reset the round and enter PLAYING.

    Only valid from START or ENDED; while PLAYING the request is ignored and
    False is returned.
    """
    if state.phase not in (Phase.START, Phase.ENDED):
        return False

    state.score = 0
    state.time_left = cfg.round_time
    state.bullets = []
    state.enemies = []
    state.fire_cooldown = 0.0
    state.spawn_accumulator = 0.0
    state.player.x = cfg.player_start_x
    state.player.y = cfg.player_y
    state.outcome = None
    state.phase = Phase.PLAYING
    return True


def end_round(state: RoundState, won: bool) -> Optional[Outcome]:
    """Enter ENDED and record the outcome. Ending a round that is not playing does nothing."""
    if state.phase is not Phase.PLAYING:
        return None
    state.phase = Phase.ENDED
    state.outcome = Outcome(won=won, score=state.score)
    return state.outcome


class StartLatch:
    """Turns a held start control into a single trigger on its rising edge."""

    def __init__(self):
        self.held = False

    def update(self, held: bool) -> bool:
        rising = held and not self.held
        self.held = held
        return rising

    def reset(self):
        self.held = False
