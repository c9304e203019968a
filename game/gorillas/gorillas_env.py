"""
GorillasEnv - headless two-player artillery environment
--------------------------------------------------------
- Gymnasium API over a single GorillasGame session
- Hot-seat: every action drives whichever player is on turn
- Arcade for rendering (only imported when a window is requested)
- Discrete MultiDiscrete action space: [angle(3), power(3), fire(2)]
- Vector observation: both gorillas + aim + bullet, from the active player's side

This is designed to be:
- Easy to script synthetic input sequences for tests
- Easy to drive from a keyboard front end or a replay file
- Easy to extend (wind, different projectiles, more players)

Install:
    pip install gymnasium arcade numpy

Quick test:
    python -m game.gorillas.gorillas_env
"""

from __future__ import annotations

import math
import time
from typing import Optional, Dict, Any

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .config import GameConfig
from .controls import InputState
from .game import GorillasGame, RoundPhase
from .utils import clamp, seed_everything


class GorillasEnv(gym.Env):
    """Two-player gorillas environment"""

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        config: Optional[GameConfig] = None,
        dt: float = 1 / 30,
        max_steps: int = 5400,  # 3 minutes at 30 FPS
        verbose: bool = False,
    ):
        super().__init__()

        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"unsupported render_mode {render_mode!r}")
        self.render_mode = render_mode

        self.config = config or GameConfig()
        self.dt = dt
        self.max_steps = max_steps
        self.verbose = verbose

        # Action space:
        # angle: 0 hold, 1 increase, 2 decrease
        # power: 0 hold, 1 increase, 2 decrease
        # fire: 0/1
        self.action_space = spaces.MultiDiscrete([3, 3, 2])

        # Observation space (vector)
        # Active gorilla pos(2), opponent pos(2), healths(2)
        # Aim: sin/cos angle(2), power(1)
        # Bullet: present(1) pos(2), turn(1)
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(13,), dtype=np.float32
        )

        self._window = None
        self.game: GorillasGame = None  # type: ignore
        self._step_count = 0

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        seed_everything(seed)

        self._step_count = 0
        self.game = GorillasGame(self.config, seed=seed, verbose=self.verbose)

        return self._get_obs(), self._get_info()

    def step(self, action):
        if self.game is None:
            raise RuntimeError("call reset() before step()")

        inputs = self.action_to_input(action)
        hit = self.game.update(self.dt, inputs)

        reward = 0.0
        if hit is not None:
            reward = self._compute_reward(hit.shooter)

        terminated = self.game.game_over
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    @staticmethod
    def action_to_input(action) -> InputState:
        angle, power, fire = int(action[0]), int(action[1]), int(action[2])
        return InputState(
            angle_up=angle == 1,
            angle_down=angle == 2,
            power_up=power == 1,
            power_down=power == 2,
            fire=fire == 1,
        )

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        game = self.game
        cfg = self.config
        me = game.turn
        active = game.gorillas[me]
        other = game.gorillas[1 - me]

        def nx(x):
            return clamp(x / cfg.width * 2 - 1, -1, 1)

        def ny(y):
            return clamp(y / cfg.height * 2 - 1, -1, 1)

        rad = math.radians(game.angles[me])
        power_span = max(1e-6, cfg.max_power - cfg.min_power)
        power = (game.powers[me] - cfg.min_power) / power_span

        obs_parts = [
            nx(active.x), ny(active.y),
            nx(other.x), ny(other.y),
            active.health / cfg.start_health * 2 - 1,
            other.health / cfg.start_health * 2 - 1,
            math.sin(rad), math.cos(rad),
            power * 2 - 1,
        ]

        bullet = game.bullet
        if bullet is not None:
            obs_parts += [1.0, nx(bullet.x), ny(bullet.y)]
        else:
            obs_parts += [-1.0, 0.0, 0.0]

        obs_parts.append(1.0 if me == 0 else -1.0)

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self, shooter: int) -> float:
        R_DAMAGE = 0.01  # per health point
        R_ROUND = 1.0

        dealt = self.game.last_damage[1 - shooter]
        taken = self.game.last_damage[shooter]
        reward = R_DAMAGE * (dealt - taken)

        if self.game.winner is not None:
            reward += R_ROUND if self.game.winner == shooter else -R_ROUND

        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        game = self.game
        return {
            "health": tuple(g.health for g in game.gorillas),
            "turn": game.turn,
            "phase": game.phase.value,
            "scores": tuple(game.scores),
            "shots_fired": tuple(game.shots_fired),
            "num_craters": len(game.terrain.craters),
            "message": game.message,
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self.render_mode == "rgb_array":
            return self._render_rgb_array()

        if self._window is None:
            from .render import GorillasWindow
            self._window = GorillasWindow(self.game.snapshot)

        self._window.source = self.game.snapshot
        self._window.on_draw()
        return None

    def _render_rgb_array(self):
        """Placeholder frame: a black image of screen size. Arcade drawing
        only happens in ``"human"`` mode."""
        return np.zeros((self.config.height, self.config.width, 3), dtype=np.uint8)

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: Optional[int] = 42,
                       config: Optional[GameConfig] = None, verbose: bool = True):
    """Play one round with random inputs for both players"""
    env = GorillasEnv(render_mode="human" if render else None, config=config, verbose=verbose)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    totals = [0.0, 0.0]

    print("Running episode... Close the window to exit early.")

    while not (terminated or truncated):
        shooter = env.game.turn
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        totals[shooter] += reward

        if render and env._window:
            env._window.dispatch_events()
            env._window.flip()
            time.sleep(env.dt)

    print(f"Random episode returns: P1 {totals[0]:.2f}  P2 {totals[1]:.2f}")
    print(f"Final message: {info['message']}")
    if env.game.phase is RoundPhase.ROUND_OVER:
        print(f"Winner: Player {env.game.winner + 1}")

    env.close()


if __name__ == "__main__":
    run_random_episode(render=True)
