"""
Tests for aim input handling.
"""
import pytest

from game.gorillas.config import GameConfig
from game.gorillas.controls import AimController, InputState, wrap_angle

LEFT = InputState(angle_up=True)
RIGHT = InputState(angle_down=True)
UP = InputState(power_up=True)
DOWN = InputState(power_down=True)
IDLE = InputState()


class TestAimController:
    """Tests for angle/power changes from held directions."""

    def setup_method(self):
        self.aim = AimController(GameConfig())

    def test_idle_changes_nothing(self):
        """No input leaves the aim alone."""
        assert self.aim.apply(IDLE, 45.0, 100.0, 0.1) == (45.0, 100.0)

    def test_first_tick_base_speed(self):
        """A fresh press moves at the base rate."""
        angle, power = self.aim.apply(LEFT, 45.0, 100.0, 0.1)
        assert angle == pytest.approx(55.0)
        assert power == 100.0

        angle, power = AimController(GameConfig()).apply(UP, 45.0, 100.0, 0.1)
        assert power == pytest.approx(107.5)

    def test_holding_accelerates(self):
        """The second tick of a hold is faster than the first."""
        angle, _ = self.aim.apply(LEFT, 45.0, 100.0, 0.1)
        angle, _ = self.aim.apply(LEFT, angle, 100.0, 0.1)
        # 10 deg, then 100 * (1 + 3 * 0.1) * 0.1
        assert angle == pytest.approx(45.0 + 10.0 + 13.0)

    def test_acceleration_caps(self):
        """After the ramp the speed stops growing."""
        angle = 0.0
        for _ in range(30):
            angle, _ = self.aim.apply(UP, angle, 100.0, 0.1)
        _, power = self.aim.apply(UP, 0.0, 100.0, 0.1)
        assert power == pytest.approx(100.0 + 75.0 * 3.5 * 0.1)

    def test_release_resets_speed(self):
        """Letting go drops straight back to the base rate."""
        for _ in range(20):
            self.aim.apply(RIGHT, 90.0, 100.0, 0.1)
        self.aim.apply(IDLE, 90.0, 100.0, 0.1)
        angle, _ = self.aim.apply(RIGHT, 90.0, 100.0, 0.1)
        assert angle == pytest.approx(80.0)

    def test_reversing_starts_at_base_speed(self):
        """Switching straight from a long LEFT hold to RIGHT moves at 1x."""
        angle = 90.0
        for _ in range(10):
            angle, _ = self.aim.apply(LEFT, angle, 100.0, 0.1)
        before = angle
        angle, _ = self.aim.apply(RIGHT, angle, 100.0, 0.1)
        assert before - angle == pytest.approx(10.0)

    def test_angle_wraps(self):
        """Angles wrap around a full turn in both directions."""
        angle, _ = self.aim.apply(LEFT, 355.0, 100.0, 0.1)
        assert angle == pytest.approx(5.0)

        angle, _ = AimController(GameConfig()).apply(RIGHT, 5.0, 100.0, 0.1)
        assert angle == pytest.approx(355.0)

    def test_power_clamped(self):
        """Power stays within the configured range."""
        _, power = self.aim.apply(UP, 0.0, 249.0, 0.1)
        assert power == 250.0

        _, power = AimController(GameConfig()).apply(DOWN, 0.0, 11.0, 0.1)
        assert power == 10.0

    def test_opposite_directions_cancel(self):
        """Holding both angle keys leaves the angle where it is."""
        both = InputState(angle_up=True, angle_down=True)
        angle, _ = self.aim.apply(both, 45.0, 100.0, 0.1)
        assert angle == pytest.approx(45.0)

    def test_reset_clears_hold_times(self):
        """reset forgets how long keys were held."""
        for _ in range(10):
            self.aim.apply(LEFT, 0.0, 100.0, 0.1)
        self.aim.reset()
        angle, _ = self.aim.apply(LEFT, 0.0, 100.0, 0.1)
        assert angle == pytest.approx(10.0)


def test_wrap_angle():
    """wrap_angle maps onto [0, 360)."""
    assert wrap_angle(360.0) == 0.0
    assert wrap_angle(-90.0) == 270.0
    assert wrap_angle(725.0) == pytest.approx(5.0)
