"""
Destructible skyline: buildings plus the craters blasted into them
"""

from __future__ import annotations

import random
import warnings
from typing import List, Optional, Sequence, Tuple

from .config import GameConfig
from .entities import Building, Crater, Gorilla

BUILDING_COLORS = ("red", "grey", "cyan")
WINDOW_COLUMNS = 3
WINDOW_PITCH = 20


def make_window_grid(height: float, rng: random.Random) -> List[List[bool]]:
    """Random lit/unlit window states for a building of the given height"""
    rows = int((height - 10) // WINDOW_PITCH)
    if rows <= 0:
        return []
    return [[rng.random() < 0.5 for _ in range(WINDOW_COLUMNS)] for _ in range(rows)]


def generate_skyline(config: GameConfig, rng: random.Random) -> List[Building]:
    """Evenly spaced buildings of random height across the screen width"""
    buildings: List[Building] = []
    if config.num_buildings == 0:
        return buildings

    building_width = config.width / config.num_buildings
    for i in range(config.num_buildings):
        height = rng.uniform(config.building_min_height, config.building_max_height)
        buildings.append(Building(
            x=i * building_width,
            width=building_width,
            height=height,
            ground_y=config.height,
            color=rng.choice(BUILDING_COLORS),
            windows=make_window_grid(height, rng),
        ))
    return buildings


class Terrain:
    """Buildings and the crater overlay for one round.

    The crater list only grows during a round; ``clear_craters`` (or
    ``regenerate``) is the only way to empty it.
    """

    def __init__(self, width: float, height: float,
                 buildings: Optional[Sequence[Building]] = None,
                 craters: Optional[Sequence[Crater]] = None):
        self.width = width
        self.height = height
        self.buildings: List[Building] = list(buildings or [])
        self.craters: List[Crater] = list(craters or [])

    @classmethod
    def generate(cls, config: GameConfig, rng: random.Random) -> "Terrain":
        return cls(config.width, config.height, generate_skyline(config, rng))

    def regenerate(self, config: GameConfig, rng: random.Random):
        """New skyline, no craters"""
        self.buildings = generate_skyline(config, rng)
        self.clear_craters()

    # ----------------------------
    # Craters
    # ----------------------------

    def is_point_destroyed(self, x: float, y: float) -> bool:
        return any(c.contains(x, y) for c in self.craters)

    def record_crater(self, x: float, y: float, radius: float) -> Crater:
        crater = Crater(x, y, radius)
        self.craters.append(crater)
        return crater

    def clear_craters(self):
        self.craters.clear()

    # ----------------------------
    # Queries
    # ----------------------------

    def building_under(self, gorilla: Gorilla, tolerance: Optional[float] = None) -> Optional[Building]:
        """Building whose rooftop the gorilla stands on, if any"""
        if tolerance is None:
            tolerance = gorilla.radius * 1.5
        for building in self.buildings:
            if building.spans_x(gorilla.x) and abs(building.top - gorilla.y) < tolerance:
                return building
        return None

    def gorilla_spawns(self, indices: Tuple[int, int], radius: float) -> List[Tuple[float, float]]:
        """Rooftop centers for the two gorillas.

        Uses the configured building indices when the skyline is wide
        enough, otherwise spreads them to roughly 20% / 80% of the
        buildings. With no buildings at all, fixed positions are used.
        """
        n = len(self.buildings)
        i1, i2 = indices
        if n <= max(i1, i2):
            warnings.warn(
                f"not enough buildings ({n}) for placement at {indices}, adjusting",
                RuntimeWarning,
                stacklevel=2,
            )
            i1 = int(n * 0.2)
            i2 = min(n - 1, max(i1 + 1, int(n * 0.8)))
            if n <= 1:
                i1 = i2 = 0

        if n == 0:
            warnings.warn("no buildings to place gorillas on, using fixed positions",
                          RuntimeWarning, stacklevel=2)
            ground = self.height - radius - 50
            return [(self.width * 0.2, ground), (self.width * 0.8, ground)]

        spawns = []
        for idx in (i1, i2):
            b = self.buildings[idx]
            spawns.append((b.x + b.width / 2, b.top - radius))
        return spawns

    # ----------------------------
    # Cosmetics
    # ----------------------------

    def blink_windows(self, rng: random.Random, count: int):
        """Toggle ``count`` randomly chosen windows"""
        windowed = [b for b in self.buildings if b.windows and b.windows[0]]
        if not windowed:
            return
        for _ in range(count):
            building = rng.choice(windowed)
            row = rng.randrange(len(building.windows))
            col = rng.randrange(len(building.windows[row]))
            building.windows[row][col] = not building.windows[row][col]
