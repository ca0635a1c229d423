"""
Simulation step - advances one frame of a round.

The step order matters: later stages read what earlier stages mutated.

    1. countdown          (may end the round: loss)
    2. player movement    (clamped to the viewport)
    3. firing             (cooldown gated)
    4. bullets            (removed past the top edge)
    5. spawning           (at most one enemy per call)
    6. enemies            (removed past the bottom edge)
    7. collisions         (kills score, player contact ends the round: loss)
    8. win check
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional

from .config import GameConfig
from .spawner import spawn_enemy, spawn_bullet
from .state import RoundState, Phase, Outcome, end_round
from .utils import clamp, intersects


@dataclass(frozen=True)
class FrameInput:
    """Held controls read at the top of a step"""
    left: bool = False
    right: bool = False
    fire: bool = False


@dataclass(frozen=True)
class StepResult:
    score: int
    time_left: float
    phase: Phase
    outcome: Optional[Outcome] = None  # set only on the step that ended the round
    kills: int = 0
    shots: int = 0
    spawned: int = 0
    escaped: int = 0

    @property
    def ended(self) -> bool:
        return self.outcome is not None


class _Counters:
    def __init__(self):
        self.kills = 0
        self.shots = 0
        self.spawned = 0
        self.escaped = 0


def _result(state: RoundState, counters: _Counters, outcome: Optional[Outcome] = None) -> StepResult:
    return StepResult(
        score=state.score,
        time_left=state.time_left,
        phase=state.phase,
        outcome=outcome,
        kills=counters.kills,
        shots=counters.shots,
        spawned=counters.spawned,
        escaped=counters.escaped,
    )


def advance(
    state: RoundState,
    inp: FrameInput,
    dt: float,
    cfg: GameConfig,
    rng=random,
) -> StepResult:
    """Advance the round by dt seconds. Does nothing unless the round is playing."""
    counters = _Counters()
    if state.phase is not Phase.PLAYING:
        return _result(state, counters)

    # Negative or NaN frame times count as a zero-length frame
    if not dt > 0:
        dt = 0.0

    # 1. Countdown
    state.time_left -= dt
    if state.time_left <= 0:
        state.time_left = 0.0
        return _result(state, counters, end_round(state, won=False))

    # 2. Player movement
    player = state.player
    if inp.left:
        player.x -= cfg.player_speed * dt
    if inp.right:
        player.x += cfg.player_speed * dt
    player.x = clamp(player.x, 0.0, cfg.width - player.w)

    # 3. Firing
    if inp.fire and state.fire_cooldown <= 0:
        spawn_bullet(state.bullets, player, cfg)
        state.fire_cooldown = cfg.fire_cooldown
        counters.shots += 1
    state.fire_cooldown -= dt

    # 4. Bullets
    for b in state.bullets:
        b.y -= b.speed * dt
    state.bullets = [b for b in state.bullets if b.y + b.h >= 0]

    # 5. Spawning. The remainder carries over so the long-run rate holds under
    # uneven frames, but one call never spawns more than one enemy.
    state.spawn_accumulator += dt
    if state.spawn_accumulator >= cfg.spawn_interval:
        state.spawn_accumulator %= cfg.spawn_interval
        spawn_enemy(state.enemies, cfg, rng)
        counters.spawned += 1

    # 6. Enemies
    for e in state.enemies:
        e.y += e.speed * dt
    kept = [e for e in state.enemies if e.y <= cfg.height]
    counters.escaped = len(state.enemies) - len(kept)
    state.enemies = kept

    # 7. Collisions, newest enemy and newest bullet first
    buffer = cfg.collision_buffer
    for i in range(len(state.enemies) - 1, -1, -1):
        e = state.enemies[i]
        hit = False
        for j in range(len(state.bullets) - 1, -1, -1):
            if intersects(e, state.bullets[j], buffer):
                del state.enemies[i]
                del state.bullets[j]
                state.score += cfg.kill_score
                counters.kills += 1
                hit = True
                break
        if hit:
            continue
        if intersects(e, player, buffer):
            return _result(state, counters, end_round(state, won=False))

    # 8. Win
    if state.score >= cfg.win_score and state.phase is Phase.PLAYING:
        return _result(state, counters, end_round(state, won=True))

    return _result(state, counters)
