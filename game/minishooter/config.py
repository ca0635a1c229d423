"""
Game configuration
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class GameConfig:
    """All tunables of a round. Fixed once a game is created."""

    # Viewport
    width: int = 800
    height: int = 600

    # Round
    round_time: float = 60.0  # seconds
    win_score: int = 700
    kill_score: int = 10

    # Player
    player_speed: float = 400.0  # px/s
    player_width: float = 50.0
    player_height: float = 50.0
    player_bottom_margin: float = 60.0  # player y = height - margin

    # Bullets
    bullet_speed: float = 800.0  # px/s
    bullet_width: float = 8.0
    bullet_height: float = 12.0
    bullet_offset_y: float = 10.0
    fire_cooldown: float = 0.12  # seconds

    # Enemies
    enemy_speed: float = 120.0  # px/s
    enemy_speed_jitter: float = 40.0
    enemy_size_min: float = 28.0
    enemy_size_max: float = 52.0
    spawn_interval: float = 0.8  # seconds

    # Collision tolerance
    collision_buffer: float = 5.0

    # Presentation
    outcome_delay: float = 0.5  # seconds before the end banner shows

    def __post_init__(self):
        self.validate()

    @property
    def player_start_x(self) -> float:
        return self.width / 2 - self.player_width / 2

    @property
    def player_y(self) -> float:
        return self.height - self.player_bottom_margin

    def validate(self):
        """Raise ValueError if the configuration cannot produce a playable round"""
        positive = (
            "width", "height", "round_time", "win_score", "kill_score",
            "player_speed", "player_width", "player_height",
            "bullet_speed", "bullet_width", "bullet_height",
            "enemy_speed", "enemy_size_min", "enemy_size_max", "spawn_interval",
        )
        for name in positive:
            if not getattr(self, name) > 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)!r}")

        non_negative = (
            "fire_cooldown", "enemy_speed_jitter", "collision_buffer",
            "outcome_delay", "player_bottom_margin", "bullet_offset_y",
        )
        for name in non_negative:
            if not getattr(self, name) >= 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)!r}")

        if self.enemy_size_min >= self.enemy_size_max:
            raise ValueError(
                f"enemy_size_min ({self.enemy_size_min}) must be below "
                f"enemy_size_max ({self.enemy_size_max})"
            )
        if self.player_width > self.width:
            raise ValueError("player_width does not fit in the viewport")
        if self.enemy_size_max > self.width:
            raise ValueError("enemy_size_max does not fit in the viewport")

    @classmethod
    def from_dict(cls, overrides: Optional[Dict[str, Any]] = None) -> "GameConfig":
        """Build a config from a dict of overrides, rejecting unknown keys"""
        overrides = dict(overrides or {})
        known = {f.name for f in fields(cls)}
        for key in overrides:
            if key not in known:
                raise ValueError(f"Unknown game config key: {key!r}")
        return cls(**overrides)

    def with_overrides(self, **overrides) -> "GameConfig":
        return replace(self, **overrides)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


DEFAULT_CONFIG = GameConfig()
