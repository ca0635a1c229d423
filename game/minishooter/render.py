"""
Render step - turns a round state into a drawable frame.

`draw` only reads the state. The frame it returns is consumed by the arcade
window and by `rasterize`, which paints it into a numpy RGB array for
`rgb_array` rendering.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .config import GameConfig
from .state import RoundState, Phase
from .utils import display_time

# Colors
BG_C = (0, 0, 0)
PLAYER_C = (41, 163, 255)
BULLET_C = (140, 210, 137)
ENEMY_C = (224, 22, 22)
HUD_C = (255, 255, 255)

START_MESSAGE = "Press SPACE to Start"


@dataclass(frozen=True)
class RectView:
    x: float
    y: float
    w: float
    h: float


@dataclass(frozen=True)
class Frame:
    """Immutable snapshot of everything the presentation layer shows"""
    width: int
    height: int
    phase: Phase
    score: int
    time_display: int
    player: Optional[RectView]
    bullets: Tuple[RectView, ...]
    enemies: Tuple[RectView, ...]
    message: Optional[str] = None

    @property
    def hud(self) -> Tuple[str, str]:
        return f"Score: {self.score}", f"Time: {self.time_display}"


def outcome_message(won: bool, score: int) -> str:
    return f"You win! Score: {score}" if won else f"Game over! Score: {score}"


def _view(r) -> RectView:
    return RectView(r.x, r.y, r.w, r.h)


def draw(state: RoundState, cfg: GameConfig, banner_visible: bool = False) -> Frame:
    """
    Snapshot the state for drawing.

    On the start screen only the prompt is shown. After a round ends the last
    frame of action stays on screen and the outcome message appears once
    `banner_visible` is set.
    """
    if state.phase is Phase.START:
        return Frame(
            width=cfg.width,
            height=cfg.height,
            phase=state.phase,
            score=state.score,
            time_display=display_time(state.time_left),
            player=None,
            bullets=(),
            enemies=(),
            message=START_MESSAGE,
        )

    message = None
    if state.phase is Phase.ENDED and banner_visible and state.outcome is not None:
        message = outcome_message(state.outcome.won, state.outcome.score)

    return Frame(
        width=cfg.width,
        height=cfg.height,
        phase=state.phase,
        score=state.score,
        time_display=display_time(state.time_left),
        player=_view(state.player),
        bullets=tuple(_view(b) for b in state.bullets),
        enemies=tuple(_view(e) for e in state.enemies),
        message=message,
    )


def _fill_rect(img: np.ndarray, r: RectView, color):
    h, w = img.shape[:2]
    x0 = int(max(0, np.floor(r.x)))
    y0 = int(max(0, np.floor(r.y)))
    x1 = int(min(w, np.ceil(r.x + r.w)))
    y1 = int(min(h, np.ceil(r.y + r.h)))
    if x1 > x0 and y1 > y0:
        img[y0:y1, x0:x1] = color


def _fill_circle(img: np.ndarray, r: RectView, color):
    h, w = img.shape[:2]
    x0 = int(max(0, np.floor(r.x)))
    y0 = int(max(0, np.floor(r.y)))
    x1 = int(min(w, np.ceil(r.x + r.w)))
    y1 = int(min(h, np.ceil(r.y + r.h)))
    if x1 <= x0 or y1 <= y0:
        return

    # Only test pixels inside the bounding box
    ys, xs = np.mgrid[y0:y1, x0:x1]
    cx = r.x + r.w / 2
    cy = r.y + r.h / 2
    rad = r.w / 2
    mask = (xs + 0.5 - cx) ** 2 + (ys + 0.5 - cy) ** 2 <= rad * rad
    img[y0:y1, x0:x1][mask] = color


def rasterize(frame: Frame) -> np.ndarray:
    """Paint a frame into an (height, width, 3) uint8 array. Text is not drawn."""
    img = np.zeros((frame.height, frame.width, 3), dtype=np.uint8)
    img[:, :] = BG_C

    if frame.player is None:
        return img

    for b in frame.bullets:
        _fill_rect(img, b, BULLET_C)
    for e in frame.enemies:
        _fill_circle(img, e, ENEMY_C)
    _fill_rect(img, frame.player, PLAYER_C)
    return img
