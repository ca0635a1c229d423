from __future__ import annotations

import math
import random

import pytest

from game.minishooter.config import GameConfig
from game.minishooter.entities import Bullet, Enemy
from game.minishooter.simulation import FrameInput, advance
from game.minishooter.state import Phase, RoundState, start_round

IDLE = FrameInput()
FIRE = FrameInput(fire=True)
LEFT = FrameInput(left=True)
RIGHT = FrameInput(right=True)


def _enemy_on(x: float, y: float, size: float = 40.0) -> Enemy:
    return Enemy(x=x, y=y, w=size, h=size, speed=120.0)


# ----------------------------
# Phase gating
# ----------------------------

def test_no_op_on_start_screen(cfg: GameConfig, rng) -> None:
    s = RoundState.new(cfg)
    result = advance(s, FIRE, 1.0, cfg, rng)
    assert result.outcome is None
    assert result.phase is Phase.START
    assert s.time_left == 60.0
    assert s.bullets == [] and s.enemies == []


def test_no_op_after_round_ended(state: RoundState, cfg: GameConfig, rng) -> None:
    state.phase = Phase.ENDED
    state.time_left = 12.0
    result = advance(state, FIRE, 1.0, cfg, rng)
    assert result.outcome is None
    assert state.time_left == 12.0
    assert state.bullets == []


# ----------------------------
# Countdown
# ----------------------------

def test_restart_then_first_spawn(cfg: GameConfig, rng) -> None:
    s = RoundState.new(cfg)
    assert (s.score, s.time_left, s.phase) == (0, 60.0, Phase.START)

    assert start_round(s, cfg)
    assert (s.score, s.time_left, s.phase) == (0, 60.0, Phase.PLAYING)
    assert s.bullets == [] and s.enemies == []

    result = advance(s, IDLE, 0.85, cfg, rng)
    assert len(s.enemies) == 1
    assert result.spawned == 1
    assert s.time_left == pytest.approx(59.15)
    assert s.score == 0
    assert result.outcome is None


def test_timer_floors_at_zero_and_loses(state: RoundState, cfg: GameConfig, rng) -> None:
    state.time_left = 0.5
    state.score = 300
    result = advance(state, IDLE, 1.0, cfg, rng)
    assert state.time_left == 0.0
    assert state.phase is Phase.ENDED
    assert result.outcome is not None
    assert result.outcome.won is False
    assert result.outcome.score == 300


def test_timeout_skips_the_rest_of_the_step(state: RoundState, cfg: GameConfig, rng) -> None:
    state.time_left = 0.1
    state.spawn_accumulator = 0.79
    x0 = state.player.x
    advance(state, FrameInput(left=True, fire=True), 0.2, cfg, rng)
    assert state.player.x == x0
    assert state.bullets == []
    assert state.enemies == []


def test_timer_exactly_zero_ends_round(state: RoundState, cfg: GameConfig, rng) -> None:
    state.time_left = 0.25
    result = advance(state, IDLE, 0.25, cfg, rng)
    assert state.time_left == 0.0
    assert result.outcome is not None and not result.outcome.won


# ----------------------------
# Bad frame times
# ----------------------------

@pytest.mark.parametrize("dt", [0.0, -1.0, math.nan])
def test_zero_negative_and_nan_dt_change_nothing(state: RoundState, cfg: GameConfig, rng, dt) -> None:
    x0 = state.player.x
    result = advance(state, LEFT, dt, cfg, rng)
    assert state.time_left == 60.0
    assert state.player.x == x0
    assert state.spawn_accumulator == 0.0
    assert result.outcome is None


def test_huge_dt_spawns_at_most_one_enemy(rng) -> None:
    cfg = GameConfig(round_time=100_000.0)
    s = RoundState.new(cfg)
    start_round(s, cfg)

    result = advance(s, RIGHT, 500.0, cfg, rng)
    assert result.spawned == 1
    assert s.spawn_accumulator < cfg.spawn_interval
    assert 0 <= s.player.x <= cfg.width - s.player.w
    # The lone enemy travelled far past the bottom in the same step
    assert result.escaped == 1
    assert s.enemies == []


# ----------------------------
# Player movement
# ----------------------------

def test_player_clamped_at_left_edge(state: RoundState, cfg: GameConfig, rng) -> None:
    state.player.x = 0.0
    advance(state, LEFT, 1.0, cfg, rng)
    assert state.player.x == 0.0


def test_player_clamped_at_right_edge(state: RoundState, cfg: GameConfig, rng) -> None:
    advance(state, RIGHT, 5.0, cfg, rng)
    assert state.player.x == cfg.width - state.player.w


def test_player_moves_at_configured_speed(state: RoundState, cfg: GameConfig, rng) -> None:
    x0 = state.player.x
    advance(state, LEFT, 0.1, cfg, rng)
    assert state.player.x == pytest.approx(x0 - 40.0)


def test_opposite_directions_cancel(state: RoundState, cfg: GameConfig, rng) -> None:
    x0 = state.player.x
    advance(state, FrameInput(left=True, right=True), 0.1, cfg, rng)
    assert state.player.x == pytest.approx(x0)


# ----------------------------
# Firing
# ----------------------------

def test_fire_spawns_bullet_at_player(state: RoundState, cfg: GameConfig, rng) -> None:
    result = advance(state, FIRE, 0.0, cfg, rng)
    assert result.shots == 1
    assert len(state.bullets) == 1
    b = state.bullets[0]
    assert b.x == state.player.x + state.player.w / 2 - cfg.bullet_width / 2
    assert b.y == state.player.y - cfg.bullet_offset_y
    assert state.fire_cooldown == pytest.approx(cfg.fire_cooldown)


def test_fire_is_gated_by_cooldown(state: RoundState, cfg: GameConfig, rng) -> None:
    shots = [advance(state, FIRE, 0.05, cfg, rng).shots for _ in range(4)]
    # 0.00: fire -> 0.12 -> 0.07; 0.05: 0.02; 0.10: -0.03; 0.15: fire
    assert shots == [1, 0, 0, 1]
    assert len(state.bullets) == 2


def test_cooldown_keeps_counting_down_without_fire(state: RoundState, cfg: GameConfig, rng) -> None:
    advance(state, FIRE, 0.0, cfg, rng)
    advance(state, IDLE, 0.5, cfg, rng)
    assert state.fire_cooldown < 0
    assert advance(state, FIRE, 0.0, cfg, rng).shots == 1


# ----------------------------
# Bullets and enemies
# ----------------------------

def test_bullet_removed_the_step_after_it_leaves(state: RoundState, cfg: GameConfig, rng) -> None:
    state.bullets.append(Bullet(x=10, y=5, speed=800.0))
    advance(state, IDLE, 0.02, cfg, rng)
    assert len(state.bullets) == 1
    assert state.bullets[0].y == pytest.approx(-11.0)

    advance(state, IDLE, 0.02, cfg, rng)
    assert state.bullets == []


def test_enemy_escaping_the_bottom_is_removed_without_penalty(state: RoundState, cfg: GameConfig, rng) -> None:
    state.enemies.append(_enemy_on(10, cfg.height - 1))
    result = advance(state, IDLE, 0.1, cfg, rng)
    assert state.enemies == []
    assert result.escaped == 1
    assert state.score == 0
    assert state.phase is Phase.PLAYING


def test_spawn_accumulator_keeps_the_remainder(state: RoundState, cfg: GameConfig, rng) -> None:
    advance(state, IDLE, 0.5, cfg, rng)
    assert state.enemies == []
    advance(state, IDLE, 0.5, cfg, rng)
    assert len(state.enemies) == 1
    assert state.spawn_accumulator == pytest.approx(0.2)


def test_spawn_rate_holds_under_uneven_frames(fixed_rng) -> None:
    big = GameConfig(round_time=1000.0)
    # Enemies spawn at the far left, away from the player
    rng = fixed_rng(0.0)
    s = RoundState.new(big)
    start_round(s, big)
    spawned = 0
    frames = [0.016, 0.033, 0.05, 0.1, 0.3] * 40  # 19.96 seconds
    for dt in frames:
        spawned += advance(s, IDLE, dt, big, rng).spawned
    assert spawned == int(sum(frames) // big.spawn_interval)


# ----------------------------
# Collisions
# ----------------------------

def test_bullet_and_enemy_destroy_each_other(state: RoundState, cfg: GameConfig, rng) -> None:
    state.enemies.append(_enemy_on(100, 100))
    state.bullets.append(Bullet(x=110, y=110))
    result = advance(state, IDLE, 0.0, cfg, rng)
    assert state.enemies == []
    assert state.bullets == []
    assert state.score == 10
    assert result.kills == 1


def test_enemy_consumes_only_one_bullet(state: RoundState, cfg: GameConfig, rng) -> None:
    state.enemies.append(_enemy_on(100, 100))
    state.bullets.append(Bullet(x=110, y=110))
    state.bullets.append(Bullet(x=115, y=115))
    advance(state, IDLE, 0.0, cfg, rng)
    assert state.enemies == []
    assert len(state.bullets) == 1
    assert state.score == 10


def test_each_pair_scores_once(state: RoundState, cfg: GameConfig, rng) -> None:
    state.enemies += [_enemy_on(100, 100), _enemy_on(300, 100)]
    state.bullets += [Bullet(x=110, y=110), Bullet(x=310, y=110)]
    result = advance(state, IDLE, 0.0, cfg, rng)
    assert state.enemies == [] and state.bullets == []
    assert state.score == 20
    assert result.kills == 2


def test_grazing_bullet_misses(state: RoundState, cfg: GameConfig, rng) -> None:
    state.enemies.append(_enemy_on(100, 100))
    # Bullet's right edge overlaps the enemy by 3 units only
    state.bullets.append(Bullet(x=95, y=110))
    advance(state, IDLE, 0.0, cfg, rng)
    assert len(state.enemies) == 1
    assert len(state.bullets) == 1
    assert state.score == 0


def test_enemy_touching_player_ends_round(state: RoundState, cfg: GameConfig, rng) -> None:
    p = state.player
    state.enemies.append(_enemy_on(p.x, p.y))
    result = advance(state, IDLE, 0.0, cfg, rng)
    assert state.phase is Phase.ENDED
    assert result.outcome is not None and result.outcome.won is False


def test_shot_enemy_over_player_does_not_end_round(state: RoundState, cfg: GameConfig, rng) -> None:
    p = state.player
    state.enemies.append(_enemy_on(p.x, p.y))
    state.bullets.append(Bullet(x=p.x + 10, y=p.y + 10))
    result = advance(state, IDLE, 0.0, cfg, rng)
    assert state.phase is Phase.PLAYING
    assert result.outcome is None
    assert state.score == 10


def test_first_player_hit_stops_collision_pass(state: RoundState, cfg: GameConfig, rng) -> None:
    p = state.player
    # Older enemy would be shot, but the newer one reaches the player first
    state.enemies.append(_enemy_on(100, 100))
    state.enemies.append(_enemy_on(p.x, p.y))
    state.bullets.append(Bullet(x=110, y=110))
    advance(state, IDLE, 0.0, cfg, rng)
    assert state.phase is Phase.ENDED
    assert state.score == 0
    assert len(state.bullets) == 1


# ----------------------------
# Winning
# ----------------------------

def test_reaching_win_score_wins(state: RoundState, cfg: GameConfig, rng) -> None:
    state.score = 690
    state.enemies.append(_enemy_on(100, 100))
    state.bullets.append(Bullet(x=110, y=110))
    result = advance(state, IDLE, 0.0, cfg, rng)
    assert state.score == 700
    assert state.phase is Phase.ENDED
    assert result.outcome is not None
    assert result.outcome.won is True
    assert result.outcome.score == 700


def test_player_hit_beats_win_in_same_step(state: RoundState, cfg: GameConfig, rng) -> None:
    state.score = 700
    p = state.player
    state.enemies.append(_enemy_on(p.x, p.y))
    result = advance(state, IDLE, 0.0, cfg, rng)
    assert result.outcome is not None and result.outcome.won is False


def test_timeout_beats_win_in_same_step(state: RoundState, cfg: GameConfig, rng) -> None:
    state.score = 700
    state.time_left = 0.01
    result = advance(state, IDLE, 0.1, cfg, rng)
    assert result.outcome is not None and result.outcome.won is False


def test_outcome_reported_only_once(state: RoundState, cfg: GameConfig, rng) -> None:
    state.time_left = 0.01
    first = advance(state, IDLE, 0.1, cfg, rng)
    second = advance(state, IDLE, 0.1, cfg, rng)
    assert first.ended
    assert not second.ended


# ----------------------------
# Whole-round invariants
# ----------------------------

def test_random_play_keeps_invariants(cfg: GameConfig) -> None:
    r = random.Random(7)
    s = RoundState.new(cfg)
    start_round(s, cfg)

    last_score = 0
    last_time = s.time_left
    for _ in range(5000):
        inp = FrameInput(left=r.random() < 0.4, right=r.random() < 0.4, fire=r.random() < 0.7)
        dt = r.choice([0.0, 0.008, 0.016, 0.033, 0.1, 0.25])
        result = advance(s, inp, dt, cfg, r)

        assert 0 <= s.player.x <= cfg.width - s.player.w
        assert s.score >= last_score
        assert s.score % cfg.kill_score == 0
        assert 0 <= s.time_left <= last_time
        assert all(b.y + b.h >= 0 for b in s.bullets)
        assert all(e.y <= cfg.height for e in s.enemies)
        last_score, last_time = s.score, s.time_left

        if result.ended:
            assert s.phase is Phase.ENDED
            break
    else:
        pytest.fail("round never ended")

    assert start_round(s, cfg)
    assert s.score == 0
