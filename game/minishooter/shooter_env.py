"""
ShooterEnv - the mini shooter as a Gymnasium environment
---------------------------------------------------------
- Same simulation step as the playable game, driven with a fixed dt
- Gymnasium API
- 1 RL agent that moves left/right + shoots (with cooldown)
- Enemies fall from the top; a kill scores, contact or the timer ends the round
- Vector observation: player state + top-K nearest enemies
- MultiDiscrete action space: [move(3), fire(2)]

Install:
    pip install gymnasium arcade numpy

Quick test:
    python -m game.minishooter random
"""

from __future__ import annotations

import math
import time
from typing import Optional, Dict, Any

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .config import GameConfig
from .render import draw, rasterize
from .simulation import FrameInput, StepResult, advance
from .state import RoundState, start_round
from .utils import clamp, seed_everything

# Weights used when no reward config is given
DEFAULT_REWARDS = {
    "R_KILL": 1.0,
    "R_WIN": 10.0,
    "R_LOSS": 5.0,
    "R_ESCAPE": 0.1,
    "R_SHOT": 0.01,
    "R_TIME": 0.001,
}


class ShooterEnv(gym.Env):
    """Mini shooter environment, rendered with Arcade or numpy"""

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 30}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        dt: float = 1 / 30,
        max_steps: Optional[int] = None,
        k_enemies: int = 5,
        game_config: Optional[Dict[str, Any]] = None,
        reward_config: Optional[Dict[str, Any]] = None,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unsupported render mode: {render_mode}"
        self.render_mode = render_mode

        self.cfg = GameConfig.from_dict(game_config)
        if not dt > 0:
            raise ValueError(f"dt must be positive, got {dt}")
        self.dt = dt
        if max_steps is None:
            # One step past the round length, so the timer always ends the round first
            max_steps = math.ceil(self.cfg.round_time / dt) + 1
        self.max_steps = max_steps
        self.k_enemies = k_enemies

        self.rewards = dict(DEFAULT_REWARDS)
        if reward_config:
            self.rewards.update({k: v for k, v in reward_config.items() if k.startswith("R_")})

        # Action space:
        # move: 0 stay, 1 left, 2 right
        # fire: 0/1
        self.action_space = spaces.MultiDiscrete([3, 2])

        # Observation space (vector)
        # Player: x(1) cooldown(1) time left(1) score progress(1)
        # Each enemy: rel pos(2) size(1) speed(1)
        obs_dim = 4 + self.k_enemies * 4
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None

        self.state: RoundState = RoundState.new(self.cfg)
        self._step_count = 0
        self._totals: Dict[str, int] = {}
        self._last_result: Optional[StepResult] = None

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        seed_everything(seed)

        self._step_count = 0
        self._totals = {"kills": 0, "shots": 0, "escaped": 0, "spawned": 0}
        self._last_result = None

        self.state = RoundState.new(self.cfg)
        start_round(self.state, self.cfg)

        return self._get_obs(), self._get_info()

    def step(self, action):
        move, fire = int(action[0]), int(action[1])
        inp = FrameInput(left=move == 1, right=move == 2, fire=fire == 1)

        result = advance(self.state, inp, self.dt, self.cfg)
        self._last_result = result
        for key in self._totals:
            self._totals[key] += getattr(result, key)

        reward = self._compute_reward(result)

        terminated = not self.state.playing
        self._step_count += 1
        truncated = not terminated and self._step_count >= self.max_steps

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        cfg = self.cfg
        p = self.state.player
        px, py = p.center

        span = max(1e-6, cfg.width - p.w)
        cooldown = clamp(self.state.fire_cooldown / max(1e-6, cfg.fire_cooldown), 0.0, 1.0)
        obs_parts = [
            (p.x / span) * 2 - 1,
            cooldown * 2 - 1,
            (self.state.time_left / cfg.round_time) * 2 - 1,
            clamp(self.state.score / cfg.win_score, 0.0, 1.0) * 2 - 1,
        ]

        # Enemies: top-K nearest to the player centre
        def dist(e):
            ex, ey = e.center
            return (ex - px) ** 2 + (ey - py) ** 2

        enemies_sorted = sorted(self.state.enemies, key=dist)
        max_speed = cfg.enemy_speed + cfg.enemy_speed_jitter
        for i in range(self.k_enemies):
            if i < len(enemies_sorted):
                e = enemies_sorted[i]
                ex, ey = e.center
                obs_parts += [
                    clamp((ex - px) / cfg.width, -1, 1),
                    clamp((ey - py) / cfg.height, -1, 1),
                    clamp(e.size / cfg.enemy_size_max, 0, 1),
                    clamp(e.speed / max(1e-6, max_speed), 0, 1),
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self, result: StepResult) -> float:
        r = self.rewards
        reward = 0.0

        reward += r["R_KILL"] * result.kills
        reward -= r["R_SHOT"] * result.shots
        reward -= r["R_ESCAPE"] * result.escaped
        reward -= r["R_TIME"]

        if result.outcome is not None:
            reward += r["R_WIN"] if result.outcome.won else -r["R_LOSS"]

        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        outcome = self.state.outcome
        return {
            "score": self.state.score,
            "time_left": self.state.time_left,
            "phase": self.state.phase.value,
            "won": bool(outcome is not None and outcome.won),
            "kills": self._totals.get("kills", 0),
            "shots": self._totals.get("shots", 0),
            "escaped": self._totals.get("escaped", 0),
            "num_enemies": len(self.state.enemies),
            "num_bullets": len(self.state.bullets),
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        frame = draw(self.state, self.cfg, banner_visible=not self.state.playing)

        if self.render_mode == "rgb_array":
            return rasterize(frame)

        if self._window is None:
            from .window import ShooterWindow
            self._window = ShooterWindow(self.cfg.width, self.cfg.height, title="ShooterEnv - Arcade")

        self._window.frame = frame
        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: Optional[int] = 42) -> float:
    """Run a random episode for testing"""
    env = ShooterEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    print("Running episode... Press ESC or close window to exit early.")

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward
        if render:
            time.sleep(env.dt)

    verdict = "won" if info["won"] else "lost"
    print(f"Random episode return: {total:.2f} (score {info['score']}, {verdict}, "
          f"{math.ceil(info['time_left'])}s left)")

    env.close()
    return total
