"""
Aiming input: the per-tick input value and the hold-to-accelerate controller
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .config import GameConfig
from .utils import clamp


@dataclass(frozen=True)
class InputState:
    """Input sampled once per tick by the platform layer.

    The four directional flags are hold states. ``fire`` is an edge: it is
    True only on the tick the fire key went down.
    """
    angle_up: bool = False
    angle_down: bool = False
    power_up: bool = False
    power_down: bool = False
    fire: bool = False


IDLE = InputState()


def wrap_angle(angle: float) -> float:
    return angle % 360.0


class AimController:
    """Turns held directions into angle/power changes.

    Holding a direction speeds it up linearly from 1x to ``1 + accel`` over
    ``accel_ramp`` seconds; releasing it drops straight back to 1x.
    """

    def __init__(self, config: GameConfig):
        self.config = config
        self.held = {"angle_up": 0.0, "angle_down": 0.0, "power_up": 0.0, "power_down": 0.0}

    def reset(self):
        for key in self.held:
            self.held[key] = 0.0

    def _factor(self, keys: Tuple[str, str], accel: float) -> float:
        ramp = self.config.accel_ramp
        longest = max(min(self.held[k], ramp) for k in keys)
        return 1.0 + accel * (longest / ramp)

    def apply(self, inputs: InputState, angle: float, power: float, dt: float) -> Tuple[float, float]:
        """Return the new (angle, power) after one tick of input"""
        cfg = self.config
        pressed = [key for key, down in (("angle_up", inputs.angle_up),
                                         ("angle_down", inputs.angle_down),
                                         ("power_up", inputs.power_up),
                                         ("power_down", inputs.power_down)) if down]
        # Released keys lose their ramp before this tick's speed is taken
        for key in self.held:
            if key not in pressed:
                self.held[key] = 0.0

        angle_factor = self._factor(("angle_up", "angle_down"), cfg.angle_accel)
        power_factor = self._factor(("power_up", "power_down"), cfg.power_accel)
        angle_step = cfg.angle_speed * angle_factor * dt
        power_step = cfg.power_speed * power_factor * dt

        angle_change = 0.0
        power_change = 0.0
        for key in pressed:
            self.held[key] += dt
            if key == "angle_up":
                angle_change += angle_step
            elif key == "angle_down":
                angle_change -= angle_step
            elif key == "power_up":
                power_change += power_step
            else:
                power_change -= power_step

        angle = wrap_angle(angle + angle_change)
        power = clamp(power + power_change, cfg.min_power, cfg.max_power)
        return angle, power
