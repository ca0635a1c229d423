"""
Enemy and bullet creation
"""

from __future__ import annotations

import math
import random
from typing import List

from .config import GameConfig
from .entities import Player, Bullet, Enemy
from .utils import clamp


def _uniform(rng, lo: float, hi: float) -> float:
    """Draw from [lo, hi), pulling rounding or out-of-range draws back inside"""
    if hi <= lo:
        return lo
    return clamp(rng.uniform(lo, hi), lo, math.nextafter(hi, lo))


def spawn_enemy(enemies: List[Enemy], cfg: GameConfig, rng=random) -> Enemy:
    """
    Append a new enemy just above the top edge.

    Size is drawn from [enemy_size_min, enemy_size_max) and the enemy is always
    fully inside the horizontal bounds. Speed is drawn from
    [enemy_speed, enemy_speed + enemy_speed_jitter). `rng` is anything with `uniform`.
    """
    size = _uniform(rng, cfg.enemy_size_min, cfg.enemy_size_max)

    x = clamp(rng.uniform(0.0, cfg.width - size), 0.0, cfg.width - size)

    speed = _uniform(rng, cfg.enemy_speed, cfg.enemy_speed + cfg.enemy_speed_jitter)

    enemy = Enemy(x=x, y=-size, w=size, h=size, speed=speed)
    enemies.append(enemy)
    return enemy


def spawn_bullet(bullets: List[Bullet], player: Player, cfg: GameConfig) -> Bullet:
    """Append a bullet at the player's top-centre"""
    bullet = Bullet(
        x=player.x + player.w / 2 - cfg.bullet_width / 2,
        y=player.y - cfg.bullet_offset_y,
        w=cfg.bullet_width,
        h=cfg.bullet_height,
        speed=cfg.bullet_speed,
    )
    bullets.append(bullet)
    return bullet
