"""
Round and turn state machine for a two-player gorillas session.

The game is driven entirely through ``update(dt, inputs)``: one call per
rendered frame, with the platform layer sampling the keyboard into an
``InputState``. Nothing here draws or reads devices, so whole rounds can be
played headless by feeding synthetic input.
"""

from __future__ import annotations

import math
import random
import warnings
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, List, Optional, Tuple

from .config import GameConfig
from .controls import IDLE, AimController, InputState
from .entities import Building, Bullet, Crater, Gorilla
from .geometry import explosion_damage
from .physics import CollisionEngine, Hit, HitKind
from .terrain import Terrain
from .utils import clamp


class RoundPhase(Enum):
    AIMING = "aiming"
    FIRING = "firing"
    ROUND_OVER = "round_over"


class DeferredTask:
    """One-shot callback that fires after a delay of simulated time.

    At most one callback can be pending; scheduling while one is pending is
    refused so a round can never queue two resets.
    """

    def __init__(self):
        self.remaining: Optional[float] = None
        self._callback: Optional[Callable[[], None]] = None

    @property
    def pending(self) -> bool:
        return self._callback is not None

    def schedule(self, delay: float, callback: Callable[[], None]) -> bool:
        if self.pending:
            return False
        self.remaining = delay
        self._callback = callback
        return True

    def cancel(self):
        self.remaining = None
        self._callback = None

    def advance(self, dt: float) -> bool:
        """Count down; returns True on the call that runs the callback"""
        if not self.pending:
            return False
        self.remaining -= dt
        if self.remaining > 0:
            return False
        callback = self._callback
        self.cancel()
        callback()
        return True


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of the game for the presentation layer"""
    width: int
    height: int
    gorillas: Tuple[Gorilla, ...]
    bullet: Optional[Bullet]
    buildings: Tuple[Building, ...]
    craters: Tuple[Crater, ...]
    angles: Tuple[float, float]
    powers: Tuple[float, float]
    scores: Tuple[int, int]
    shots_fired: Tuple[int, int]
    turn: int
    phase: RoundPhase
    message: str
    elapsed_time: float
    winner: Optional[int]


class GorillasGame:
    """Two gorillas, one skyline, alternating shots until someone falls"""

    def __init__(self, config: Optional[GameConfig] = None, seed: Optional[int] = None,
                 verbose: bool = False):
        self.config = config or GameConfig()
        self.rng = random.Random(seed)
        self.verbose = verbose

        self.terrain = Terrain.generate(self.config, self.rng)
        self.collisions = CollisionEngine(self.config, self.terrain)
        self.aim = AimController(self.config)
        self.reset_task = DeferredTask()

        self.gorillas: List[Gorilla] = self._place_gorillas()
        self.bullet: Optional[Bullet] = None
        self.turn = 0
        self.angles = list(self.config.start_angles)
        self.powers = [self.config.start_power, self.config.start_power]

        # Session totals, kept across rounds
        self.scores = [0, 0]
        self.shots_fired = [0, 0]
        self.rounds_played = 0
        self.elapsed_time = 0.0

        self.phase = RoundPhase.AIMING
        self.winner: Optional[int] = None
        self.message = "Player 1 Turn"
        self.last_hit: Optional[Hit] = None
        self.last_damage = (0.0, 0.0)
        self._blink_timer = self._next_blink_delay()

    # ----------------------------
    # State
    # ----------------------------

    @property
    def game_over(self) -> bool:
        return self.phase is RoundPhase.ROUND_OVER

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            width=self.config.width,
            height=self.config.height,
            gorillas=tuple(replace(g) for g in self.gorillas),
            bullet=replace(self.bullet) if self.bullet else None,
            buildings=tuple(replace(b, windows=[list(row) for row in b.windows])
                            for b in self.terrain.buildings),
            craters=tuple(self.terrain.craters),
            angles=(self.angles[0], self.angles[1]),
            powers=(self.powers[0], self.powers[1]),
            scores=(self.scores[0], self.scores[1]),
            shots_fired=(self.shots_fired[0], self.shots_fired[1]),
            turn=self.turn,
            phase=self.phase,
            message=self.message,
            elapsed_time=self.elapsed_time,
            winner=self.winner,
        )

    # ----------------------------
    # Tick
    # ----------------------------

    def update(self, dt: float, inputs: InputState = IDLE) -> Optional[Hit]:
        """Advance the simulation by one frame.

        Returns the hit resolved during this frame, if any.
        """
        dt = clamp(dt, 0.0, self.config.max_dt)
        if dt <= 0:
            return None

        # The reset countdown keeps running while the round is frozen.
        # The tick that starts a new round does nothing else.
        if self.reset_task.advance(dt) or self.game_over:
            return None

        self.elapsed_time += dt
        self._update_blink(dt)

        if self.bullet is None:
            self.angles[self.turn], self.powers[self.turn] = self.aim.apply(
                inputs, self.angles[self.turn], self.powers[self.turn], dt
            )
            if inputs.fire:
                self.fire()
            return None

        hit = self.collisions.step(self.bullet, self.gorillas, dt)
        if hit is not None:
            self.bullet = None
            self._resolve_hit(hit)
        return hit

    def fire(self) -> bool:
        """Launch a bullet for the active player. Ignored while one is in flight."""
        if self.bullet is not None or self.game_over:
            return False

        cfg = self.config
        gorilla = self.gorillas[self.turn]
        angle = self.angles[self.turn]
        # Spawn clear of the firer along the aim direction
        rad = math.radians(angle)
        self.bullet = Bullet.launch(
            gorilla.x + cfg.muzzle_offset * math.cos(rad),
            gorilla.y - cfg.muzzle_offset * math.sin(rad),
            angle, self.powers[self.turn],
            self.turn, speed_multiplier=cfg.bullet_speed_multiplier, size=cfg.bullet_size,
        )
        self.shots_fired[self.turn] += 1
        self.phase = RoundPhase.FIRING
        self.message = ""
        return True

    # ----------------------------
    # Hit resolution
    # ----------------------------

    def _resolve_hit(self, hit: Hit):
        cfg = self.config
        before = [g.health for g in self.gorillas]

        if hit.kind is HitKind.DIRECT:
            self.message = f"Direct hit on Player {hit.target + 1}!"
            self.gorillas[hit.target].health -= cfg.direct_hit_damage
        elif hit.explodes:
            self.message = "Hit self!" if hit.kind is HitKind.SELF else "Hit a building!"
            self._apply_explosion(hit)
            if hit.kind is HitKind.SELF:
                self.gorillas[hit.shooter].health -= cfg.direct_hit_damage
        elif hit.kind is HitKind.GROUND:
            self.message = "Hit the ground!"
        else:
            self.message = "Hit the wall!"

        for g in self.gorillas:
            g.health = max(0.0, g.health)

        self.last_hit = hit
        self.last_damage = tuple(b - g.health for b, g in zip(before, self.gorillas))

        winner = self._decide_winner(hit.shooter)
        if winner is None:
            self.turn = 1 - self.turn
            self.phase = RoundPhase.AIMING
        else:
            self._end_round(winner)

    def _apply_explosion(self, hit: Hit):
        cfg = self.config
        for idx, gorilla in enumerate(self.gorillas):
            if not gorilla.alive:
                continue
            damage = explosion_damage(
                hit.x, hit.y, cfg.crater_radius,
                gorilla.x, gorilla.y, gorilla.radius,
                min_damage=cfg.min_damage,
                damage_span=cfg.damage_span,
                max_damage=cfg.max_damage,
                graze_epsilon=cfg.graze_epsilon,
            )
            if damage > 0:
                self.message += f" P{idx + 1} takes {damage:.1f} damage."
                gorilla.health -= damage

    def _decide_winner(self, shooter: int) -> Optional[int]:
        p1_dead = not self.gorillas[0].alive
        p2_dead = not self.gorillas[1].alive

        if p1_dead and p2_dead:
            # shooter brought both down, the other player takes the round
            winner = 1 - shooter
            self.message += f" Both players defeated! Player {winner + 1} wins the round!"
            return winner
        if p1_dead:
            self.message += " Player 1 defeated! Player 2 wins the round!"
            return 1
        if p2_dead:
            self.message += " Player 2 defeated! Player 1 wins the round!"
            return 0
        return None

    # ----------------------------
    # Round flow
    # ----------------------------

    def _end_round(self, winner: int):
        self.scores[winner] += 1
        self.winner = winner
        self.phase = RoundPhase.ROUND_OVER
        self.rounds_played += 1
        if self.verbose:
            print(f"Round {self.rounds_played}: Player {winner + 1} wins "
                  f"(score {self.scores[0]}-{self.scores[1]})")
        self.reset_task.schedule(self.config.reset_delay, lambda: self.reset_round(winner))

    def reset_round(self, winner: Optional[int] = None):
        """Fresh skyline and gorillas; the loser of the last round shoots first"""
        cfg = self.config
        self.reset_task.cancel()
        self.terrain.regenerate(cfg, self.rng)
        self.gorillas = self._place_gorillas()
        self.bullet = None

        if winner in (0, 1):
            self.turn = 1 - winner
        else:
            warnings.warn(f"resetting round without a valid winner ({winner!r}), keeping turn",
                          RuntimeWarning, stacklevel=2)

        self.angles = list(cfg.start_angles)
        self.powers = [cfg.start_power, cfg.start_power]
        self.aim.reset()
        self.phase = RoundPhase.AIMING
        self.winner = None
        self.last_hit = None
        self.last_damage = (0.0, 0.0)
        self.message = f"Player {self.turn + 1} Turn"
        self._blink_timer = self._next_blink_delay()
        if self.verbose:
            print(f"Resetting round. Player {self.turn + 1} starts.")

    def _place_gorillas(self) -> List[Gorilla]:
        cfg = self.config
        spawns = self.terrain.gorilla_spawns(cfg.gorilla_buildings, cfg.gorilla_radius)
        return [Gorilla(x, y, radius=cfg.gorilla_radius, health=cfg.start_health) for x, y in spawns]

    # ----------------------------
    # Cosmetics
    # ----------------------------

    def _next_blink_delay(self) -> float:
        return self.rng.uniform(*self.config.blink_interval)

    def _update_blink(self, dt: float):
        self._blink_timer -= dt
        if self._blink_timer <= 0:
            self.terrain.blink_windows(self.rng, self.rng.randint(*self.config.blink_count))
            self._blink_timer = self._next_blink_delay()
