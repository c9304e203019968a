"""
Bullet flight and collision resolution.

A bullet is either still flying (``check_collision`` returns None) or has
resolved into exactly one ``Hit``. Checks run in a fixed order each tick:
ground, walls, gorillas, buildings.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from .config import GameConfig
from .entities import Bullet, Gorilla
from .terrain import Terrain
from .utils import rect_overlap


class HitKind(Enum):
    GROUND = "ground"
    WALL = "wall"
    DIRECT = "direct"     # opponent struck by the projectile itself
    SELF = "self"         # firer struck after immunity, explodes
    BUILDING = "building"


@dataclass(frozen=True)
class Hit:
    """Resolved collision"""
    kind: HitKind
    x: float
    y: float
    shooter: int
    target: Optional[int] = None

    @property
    def explodes(self) -> bool:
        return self.kind in (HitKind.BUILDING, HitKind.SELF)


def integrate_bullet(bullet: Bullet, dt: float, gravity: float):
    """Advance one tick: move with the current velocity, then apply gravity"""
    bullet.time_alive += dt
    bullet.x += bullet.vx * dt
    bullet.y += bullet.vy * dt
    bullet.vy += gravity * dt


class CollisionEngine:
    """Resolves bullet collisions against the arena, gorillas and terrain.

    The terrain is shared by reference with the round; explosions and
    ground impacts record their craters on it directly.
    """

    def __init__(self, config: GameConfig, terrain: Terrain):
        self.config = config
        self.terrain = terrain

    def is_immune(self, bullet: Bullet) -> bool:
        return bullet.time_alive < self.config.immunity_duration

    def step(self, bullet: Bullet, gorillas: Sequence[Gorilla], dt: float) -> Optional[Hit]:
        integrate_bullet(bullet, dt, self.config.gravity)
        return self.check_collision(bullet, gorillas)

    def check_collision(self, bullet: Bullet, gorillas: Sequence[Gorilla]) -> Optional[Hit]:
        cfg = self.config
        x, y = bullet.x, bullet.y
        immune = self.is_immune(bullet)
        bullet_rect = bullet.rect()

        # Arena bounds apply regardless of immunity
        if y > cfg.height:
            self.terrain.record_crater(x, cfg.height, cfg.ground_crater_radius)
            return Hit(HitKind.GROUND, x, cfg.height, bullet.owner)
        if x < 0 or x > cfg.width:
            return Hit(HitKind.WALL, x, y, bullet.owner)

        for i, gorilla in enumerate(gorillas):
            if not rect_overlap(bullet_rect, gorilla.rect()):
                continue
            if i == bullet.owner:
                if immune:
                    continue
                self.terrain.record_crater(x, y, cfg.crater_radius)
                return Hit(HitKind.SELF, x, y, bullet.owner, target=i)
            return Hit(HitKind.DIRECT, x, y, bullet.owner, target=i)

        firing_building = None
        if immune and 0 <= bullet.owner < len(gorillas):
            firing_building = self.terrain.building_under(gorillas[bullet.owner])

        for building in self.terrain.buildings:
            if not rect_overlap(bullet_rect, building.rect()):
                continue
            if not (building.top <= y <= cfg.height):
                continue
            if building is firing_building:
                continue
            if self.terrain.is_point_destroyed(x, y):
                # destroyed regions are transparent, keep scanning
                continue
            self.terrain.record_crater(x, y, cfg.crater_radius)
            return Hit(HitKind.BUILDING, x, y, bullet.owner)

        return None
