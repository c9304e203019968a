"""
Tests for the Gymnasium wrapper.
"""
import numpy as np
import pytest

from game.gorillas.entities import Bullet, Gorilla
from game.gorillas.game import RoundPhase
from game.gorillas.gorillas_env import GorillasEnv

IDLE = [0, 0, 0]


class TestGorillasEnv:
    """Tests for GorillasEnv reset/step."""

    def test_reset_observation(self):
        """Observations match the declared space."""
        env = GorillasEnv()
        obs, info = env.reset(seed=11)

        assert obs.shape == (13,)
        assert obs.dtype == np.float32
        assert env.observation_space.contains(obs)
        assert info["turn"] == 0
        assert info["phase"] == "aiming"

    def test_step_before_reset(self):
        """Stepping an unreset env is an error."""
        with pytest.raises(RuntimeError):
            GorillasEnv().step(IDLE)

    def test_bad_render_mode(self):
        """Unknown render modes are rejected."""
        with pytest.raises(ValueError):
            GorillasEnv(render_mode="ascii")

    def test_action_mapping(self):
        """Action components map onto input flags."""
        inputs = GorillasEnv.action_to_input([1, 2, 1])
        assert inputs.angle_up and not inputs.angle_down
        assert inputs.power_down and not inputs.power_up
        assert inputs.fire

        inputs = GorillasEnv.action_to_input([2, 0, 0])
        assert inputs.angle_down
        assert not (inputs.power_up or inputs.power_down or inputs.fire)

    def test_fire_action(self):
        """The fire component launches a bullet."""
        env = GorillasEnv()
        env.reset(seed=11)
        obs, reward, terminated, truncated, info = env.step([0, 0, 1])

        assert info["shots_fired"] == (1, 0)
        assert info["phase"] == "firing"
        assert obs[9] == 1.0
        assert reward == 0.0
        assert not terminated

    def test_winning_hit_reward(self):
        """A fatal direct hit pays damage plus the round bonus."""
        env = GorillasEnv()
        env.reset(seed=12)
        game = env.game
        game.terrain.buildings = []
        game.gorillas = [Gorilla(200, 300), Gorilla(600, 300)]
        game.bullet = Bullet(x=600, y=300, vx=0.0, vy=0.0, owner=0, time_alive=1.0)
        game.phase = RoundPhase.FIRING

        obs, reward, terminated, truncated, info = env.step(IDLE)

        assert reward == pytest.approx(2.0)
        assert terminated
        assert info["scores"] == (1, 0)

    def test_truncation(self):
        """Long idle sessions are truncated at max_steps."""
        env = GorillasEnv(max_steps=50)
        env.reset(seed=13)
        for _ in range(49):
            _, _, terminated, truncated, _ = env.step(IDLE)
            assert not truncated
        _, _, terminated, truncated, _ = env.step(IDLE)

        assert truncated
        assert not terminated

    def test_rgb_array_render(self):
        """rgb_array mode returns a frame of screen size."""
        env = GorillasEnv(render_mode="rgb_array")
        env.reset(seed=14)
        frame = env.render()

        assert frame.shape == (1010, 1920, 3)
        env.close()
