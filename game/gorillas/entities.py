"""
Game entity dataclasses
"""

import math
from dataclasses import dataclass, field
from typing import List, Tuple

Rect = Tuple[float, float, float, float]  # x, y, width, height (y grows downward)


@dataclass
class Gorilla:
    """Player gorilla standing on a rooftop"""
    x: float
    y: float
    radius: float = 20.0
    health: float = 100.0

    @property
    def alive(self) -> bool:
        return self.health > 0

    def rect(self) -> Rect:
        return (self.x - self.radius, self.y - self.radius, self.radius * 2, self.radius * 2)


@dataclass
class Building:
    """Skyline building anchored to the bottom edge of the screen"""
    x: float
    width: float
    height: float
    ground_y: float
    color: str = "grey"
    windows: List[List[bool]] = field(default_factory=list)

    @property
    def top(self) -> float:
        return self.ground_y - self.height

    def rect(self) -> Rect:
        return (self.x, self.top, self.width, self.height)

    def spans_x(self, x: float) -> bool:
        return self.x <= x < self.x + self.width


@dataclass(frozen=True)
class Crater:
    """Circular region of terrain destroyed by an explosion"""
    x: float
    y: float
    radius: float

    def contains(self, x: float, y: float) -> bool:
        dx = x - self.x
        dy = y - self.y
        return dx * dx + dy * dy <= self.radius * self.radius


@dataclass
class Bullet:
    """Projectile in flight"""
    x: float
    y: float
    vx: float
    vy: float
    owner: int
    size: float = 10.0
    time_alive: float = 0.0

    @classmethod
    def launch(cls, x: float, y: float, angle: float, power: float, owner: int,
               speed_multiplier: float = 1.5, size: float = 10.0) -> "Bullet":
        """Create a bullet from an aim angle (degrees, counter-clockwise) and power"""
        rad = math.radians(angle)
        speed = power * speed_multiplier
        # screen y grows downward
        return cls(x=x, y=y, vx=speed * math.cos(rad), vy=-speed * math.sin(rad),
                   owner=owner, size=size)

    def rect(self) -> Rect:
        half = self.size / 2
        return (self.x - half, self.y - half, self.size, self.size)
