"""Mini shooter - arcade shooter simulation, front end and RL environment"""

from .config import GameConfig
from .driver import FrameDriver, InputState
from .render import Frame, draw, rasterize
from .shooter_env import ShooterEnv, run_random_episode
from .simulation import FrameInput, StepResult, advance
from .state import Phase, Outcome, RoundState, start_round, end_round

__all__ = [
    'GameConfig', 'FrameDriver', 'InputState', 'Frame', 'draw', 'rasterize',
    'ShooterEnv', 'run_random_episode', 'FrameInput', 'StepResult', 'advance',
    'Phase', 'Outcome', 'RoundState', 'start_round', 'end_round',
]
