"""
Arcade front end for the shooter.

Simulation coordinates are top-left with y down; arcade draws bottom-left with
y up, so every rect is flipped on the way out.
"""

from __future__ import annotations

import time
from typing import Optional

import arcade

from .config import GameConfig
from .driver import FrameDriver
from .render import (
    Frame, RectView, BG_C, PLAYER_C, BULLET_C, ENEMY_C, HUD_C,
)
from .utils import seed_everything

KEY_BINDINGS = {
    arcade.key.LEFT: ("left",),
    arcade.key.A: ("left",),
    arcade.key.RIGHT: ("right",),
    arcade.key.D: ("right",),
    arcade.key.SPACE: ("fire", "start"),
    arcade.key.UP: ("fire",),
}


def _load_texture(path: Optional[str], what: str):
    if not path:
        return None
    try:
        return arcade.load_texture(path)
    except (OSError, ValueError) as exc:
        print(f"[ShooterWindow] Could not load {what} image {path!r}: {exc}. Using placeholder.")
        return None


class ShooterWindow(arcade.Window):
    """Window that draws frames, either ticked by a FrameDriver or pushed by the env"""

    def __init__(
        self,
        width: int,
        height: int,
        driver: Optional[FrameDriver] = None,
        title: str = "Mini Shooter",
        player_image: Optional[str] = None,
        background_image: Optional[str] = None,
    ):
        super().__init__(width, height, title)
        self.driver = driver
        self.frame: Optional[Frame] = None
        self._down = set()

        self.player_texture = _load_texture(player_image, "player")
        self.background_texture = _load_texture(background_image, "background")

    def _flip_y(self, r: RectView) -> float:
        """Bottom edge in arcade coordinates"""
        return self.height - r.y - r.h

    # ----------------------------
    # Event handlers
    # ----------------------------

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol == arcade.key.ESCAPE:
            self.close()
            return
        self._down.add(symbol)
        if self.driver is None:
            return
        if symbol == arcade.key.R:
            self.driver.request_restart()
            return
        for control in KEY_BINDINGS.get(symbol, ()):
            self.driver.input.press(control)

    def on_key_release(self, symbol: int, modifiers: int):
        self._down.discard(symbol)
        if self.driver is None:
            return
        for control in KEY_BINDINGS.get(symbol, ()):
            # Another key may still hold the same control (e.g. LEFT and A)
            still_held = any(
                control in controls and other in self._down
                for other, controls in KEY_BINDINGS.items()
                if other != symbol
            )
            if not still_held:
                self.driver.input.release(control)

    def on_mouse_press(self, x: int, y: int, button: int, modifiers: int):
        if self.driver is not None and self.driver.state.playing:
            self.driver.input.click()

    def on_update(self, delta_time: float):
        if self.driver is not None:
            self.frame = self.driver.tick(time.perf_counter())

    # ----------------------------
    # Drawing
    # ----------------------------

    def _draw_rect(self, r: RectView, color):
        bottom = self._flip_y(r)
        arcade.draw_lrbt_rectangle_filled(r.x, r.x + r.w, bottom, bottom + r.h, color)

    def on_draw(self):
        self.clear()

        if self.background_texture is not None:
            arcade.draw_texture_rect(
                self.background_texture, arcade.LBWH(0, 0, self.width, self.height)
            )
        else:
            arcade.draw_lrbt_rectangle_filled(0, self.width, 0, self.height, BG_C)

        frame = self.frame
        if frame is None:
            return

        if frame.player is not None:
            p = frame.player
            if self.player_texture is not None:
                arcade.draw_texture_rect(
                    self.player_texture, arcade.LBWH(p.x, self._flip_y(p), p.w, p.h)
                )
            else:
                self._draw_rect(p, PLAYER_C)

            for b in frame.bullets:
                self._draw_rect(b, BULLET_C)

            for e in frame.enemies:
                arcade.draw_circle_filled(
                    e.x + e.w / 2, self.height - (e.y + e.h / 2), e.w / 2, ENEMY_C
                )

            score_txt, time_txt = frame.hud
            arcade.draw_text(score_txt, 12, self.height - 28, HUD_C, 16)
            arcade.draw_text(time_txt, self.width - 12, self.height - 28, HUD_C, 16,
                             anchor_x="right")

        if frame.message:
            if frame.player is not None:
                arcade.draw_lrbt_rectangle_filled(
                    0, self.width, self.height / 2 - 40, self.height / 2 + 40, (0, 0, 0, 180)
                )
            arcade.draw_text(frame.message, self.width / 2, self.height / 2, HUD_C, 24,
                             anchor_x="center", anchor_y="center")
            if frame.player is not None:
                arcade.draw_text("Press SPACE or R to restart", self.width / 2,
                                 self.height / 2 - 28, HUD_C, 12,
                                 anchor_x="center", anchor_y="center")


def run_game(
    cfg: Optional[GameConfig] = None,
    seed: Optional[int] = None,
    player_image: Optional[str] = None,
    background_image: Optional[str] = None,
    verbose: int = 1,
):
    """Open the game window and run until it is closed"""
    cfg = cfg or GameConfig()
    seed_everything(seed)
    driver = FrameDriver(cfg, verbose=verbose)
    window = ShooterWindow(
        cfg.width,
        cfg.height,
        driver=driver,
        player_image=player_image,
        background_image=background_image,
    )
    window.frame = driver.tick(time.perf_counter())
    arcade.run()
