"""Gorillas - two-player turn-based artillery on a destructible skyline"""

from .config import GameConfig, make_config
from .game import GorillasGame, GameSnapshot, RoundPhase
from .gorillas_env import GorillasEnv, run_random_episode

__all__ = ['GameConfig', 'make_config', 'GorillasGame', 'GameSnapshot', 'RoundPhase',
           'GorillasEnv', 'run_random_episode']
