"""
Frame driver - turns host timestamps and buffered input into simulation steps.

The host calls `tick(timestamp)` once per display refresh with non-decreasing
timestamps in seconds. Key and mouse events arriving between frames only set
flags on `InputState`; they are read at the top of the next tick.
"""

from __future__ import annotations

import random
from typing import Optional

from .config import GameConfig
from .render import Frame, draw
from .simulation import FrameInput, StepResult, advance
from .state import RoundState, Phase, StartLatch, start_round

CONTROLS = ("left", "right", "fire", "start")


class InputState:
    """
    Currently held logical controls, plus one-shot pulses.

    A pointer click queues a fire; pressing start queues a start so a tap that
    is released before the next frame still counts.
    """

    def __init__(self):
        self.held = {name: False for name in CONTROLS}
        self.fire_pulse = False
        self.start_pulse = False

    def _check(self, control: str):
        if control not in self.held:
            raise ValueError(f"Unknown control: {control!r}")

    def press(self, control: str):
        self._check(control)
        if control == "start" and not self.held["start"]:
            self.start_pulse = True
        self.held[control] = True

    def release(self, control: str):
        self._check(control)
        self.held[control] = False

    def click(self):
        self.fire_pulse = True

    def clear(self):
        for name in self.held:
            self.held[name] = False
        self.fire_pulse = False
        self.start_pulse = False

    def start_requested(self) -> bool:
        """Start held now or pressed since the last frame. Consumes the pulse."""
        requested = self.held["start"] or self.start_pulse
        self.start_pulse = False
        return requested

    def snapshot(self) -> FrameInput:
        """Held flags for this frame. Consumes a pending click."""
        fire = self.held["fire"] or self.fire_pulse
        self.fire_pulse = False
        return FrameInput(left=self.held["left"], right=self.held["right"], fire=fire)


class OutcomeBanner:
    """Delays the end-of-round overlay so the last frame of action stays visible"""

    def __init__(self, delay: float):
        self.delay = delay
        self.elapsed: Optional[float] = None

    @property
    def armed(self) -> bool:
        return self.elapsed is not None

    @property
    def visible(self) -> bool:
        return self.elapsed is not None and self.elapsed >= self.delay

    def arm(self):
        self.elapsed = 0.0

    def update(self, dt: float):
        if self.elapsed is not None:
            self.elapsed += dt

    def clear(self):
        self.elapsed = None


class FrameDriver:
    """Runs one simulation step and one render step per display refresh"""

    def __init__(self, cfg: Optional[GameConfig] = None, rng=random, verbose: int = 0):
        self.cfg = cfg or GameConfig()
        self.rng = rng
        self.verbose = verbose

        self.state = RoundState.new(self.cfg)
        self.input = InputState()
        self.banner = OutcomeBanner(self.cfg.outcome_delay)
        self._latch = StartLatch()
        self._last_time: Optional[float] = None
        self.last_result: Optional[StepResult] = None

    def _elapsed(self, timestamp: float) -> float:
        if self._last_time is None:
            self._last_time = timestamp
        dt = timestamp - self._last_time
        self._last_time = timestamp
        return dt if dt > 0 else 0.0

    def request_restart(self) -> bool:
        """Start or restart the round. Ignored while a round is playing."""
        if not start_round(self.state, self.cfg):
            return False
        self.banner.clear()
        # A fire click queued on the overlay must not shoot in the new round
        self.input.fire_pulse = False
        if self.verbose > 0:
            print(f"[Round] Started ({self.cfg.round_time:.0f}s, win at {self.cfg.win_score})")
        return True

    def tick(self, timestamp: float) -> Frame:
        dt = self._elapsed(timestamp)

        if self._latch.update(self.input.start_requested()):
            if self.state.phase in (Phase.START, Phase.ENDED):
                self.request_restart()

        result = advance(self.state, self.input.snapshot(), dt, self.cfg, self.rng)
        self.last_result = result

        if result.outcome is not None:
            self.banner.arm()
            if self.verbose > 0:
                verdict = "won" if result.outcome.won else "lost"
                print(f"[Round] Ended, {verdict} with score {result.outcome.score} "
                      f"({self.state.time_left:.2f}s left)")
        else:
            self.banner.update(dt)

        return draw(self.state, self.cfg, banner_visible=self.banner.visible)
