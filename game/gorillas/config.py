"""
Tunable constants for the gorillas game.

Every value is fixed once a game is constructed. The defaults reproduce the
classic full-HD layout; ``PRESETS`` holds named override sets for other
window sizes.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class GameConfig:
    """Game constants (pixels, seconds, degrees)"""

    # Arena
    width: int = 1920
    height: int = 1010

    # Physics
    gravity: float = 19.6 * 5  # tuned for frame-driven stepping
    bullet_size: float = 10.0
    bullet_speed_multiplier: float = 1.5
    immunity_duration: float = 0.05
    muzzle_offset: float = 30.0
    max_dt: float = 0.1

    # Craters / damage
    crater_radius: float = 60.0
    ground_crater_scale: float = 0.5
    direct_hit_damage: float = 100.0
    min_damage: float = 20.0
    damage_span: float = 70.0
    max_damage: float = 90.0
    graze_epsilon: float = 1.0

    # Gorillas
    gorilla_radius: float = 20.0
    start_health: float = 100.0
    gorilla_buildings: Tuple[int, int] = (5, 24)

    # Aiming
    min_power: float = 10.0
    max_power: float = 250.0
    start_power: float = 100.0
    start_angles: Tuple[float, float] = (45.0, 135.0)
    angle_speed: float = 100.0  # degrees per second
    power_speed: float = 75.0  # units per second
    angle_accel: float = 3.0
    power_accel: float = 2.5
    accel_ramp: float = 1.0

    # Skyline
    num_buildings: int = 30
    building_min_height: float = 100.0
    building_max_height: float = 400.0

    # Round flow / cosmetics
    reset_delay: float = 3.0
    blink_interval: Tuple[float, float] = (0.25, 0.75)
    blink_count: Tuple[int, int] = (5, 15)

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"screen size must be positive, got {self.width}x{self.height}")
        if self.min_power > self.max_power:
            raise ValueError(f"min_power {self.min_power} exceeds max_power {self.max_power}")
        if self.num_buildings < 0:
            raise ValueError("num_buildings must be >= 0")
        if self.accel_ramp <= 0:
            raise ValueError("accel_ramp must be > 0")

    @property
    def ground_crater_radius(self) -> float:
        return self.crater_radius * self.ground_crater_scale


# Named override sets, in the same spirit as the experiment config dicts
PRESETS: Dict[str, Dict[str, Any]] = {
    "classic": {},
    "compact": {
        "width": 1280,
        "height": 720,
        "num_buildings": 20,
        "gorilla_buildings": (3, 16),
        "building_max_height": 320.0,
    },
}


def make_config(preset: Optional[str] = "classic", **overrides: Any) -> GameConfig:
    """Build a GameConfig from a named preset plus keyword overrides"""
    base: Dict[str, Any] = {}
    if preset is not None:
        if preset not in PRESETS:
            raise ValueError(f"unknown preset {preset!r}, expected one of {sorted(PRESETS)}")
        base.update(PRESETS[preset])

    known = {f.name for f in fields(GameConfig)}
    unknown = set(overrides) - known
    if unknown:
        raise ValueError(f"unknown config keys: {sorted(unknown)}")
    base.update(overrides)
    return replace(GameConfig(), **base)
