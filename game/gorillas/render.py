"""
Arcade front end: draws game snapshots and feeds keyboard input to the game.

The core uses screen coordinates with y growing downward; Arcade's origin
is bottom-left, so every y is flipped on the way out.
"""

from __future__ import annotations

import math
from typing import Callable, Optional

import arcade

from .controls import InputState
from .entities import Building
from .game import GameSnapshot, GorillasGame, RoundPhase

SKY = (0, 0, 255)
WHITE = (255, 255, 255)
YELLOW = (255, 255, 0)
DARK_GREY = (64, 64, 64)
CYAN = (0, 255, 255)
RED = (255, 0, 0)
OVERLAY = (0, 0, 0, 180)

BUILDING_COLORS = {
    "red": (255, 0, 0),
    "grey": (128, 128, 128),
    "cyan": (0, 255, 255),
}

SUN_Y = 100
SUN_RADIUS = 40
SUN_RAYS = 12
SUN_RAY_LENGTH = 60
SUN_RAY_SPEED = 60.0  # degrees per second


class GorillasWindow(arcade.Window):
    """Arcade window that draws whatever snapshot ``source`` returns"""

    def __init__(self, source: Callable[[], GameSnapshot], title: str = "Gorillas"):
        snap = source()
        super().__init__(snap.width, snap.height, title)
        self.source = source
        self.ray_angle = 0.0

    def advance_sky(self, dt: float):
        self.ray_angle = (self.ray_angle + SUN_RAY_SPEED * dt) % 360.0

    def sy(self, y: float) -> float:
        """Flip a core y coordinate into Arcade space"""
        return self.height - y

    def on_draw(self):
        """Draw the current game state"""
        snap = self.source()
        self.clear(color=SKY)

        self.draw_sun()
        for building in snap.buildings:
            self.draw_building(building)
        self.draw_craters(snap)

        if snap.bullet is not None:
            b = snap.bullet
            half = b.size / 2
            arcade.draw_lrbt_rectangle_filled(
                b.x - half, b.x + half, self.sy(b.y + half), self.sy(b.y - half), YELLOW
            )

        for g in snap.gorillas:
            arcade.draw_circle_filled(g.x, self.sy(g.y), g.radius, RED)
            arcade.draw_text(f"{max(0, round(g.health))}", g.x, self.sy(g.y - g.radius - 5),
                             WHITE, 18, anchor_x="center")

        self.draw_ui(snap)
        if snap.bullet is None and snap.phase is RoundPhase.AIMING:
            self.draw_arrow(snap)
        if snap.phase is RoundPhase.ROUND_OVER and snap.message:
            self.draw_overlay(snap)

    # ----------------------------
    # Scenery
    # ----------------------------

    def draw_sun(self):
        cx, cy = self.width / 2, self.sy(SUN_Y)
        arcade.draw_circle_filled(cx, cy, SUN_RADIUS, YELLOW)
        for i in range(SUN_RAYS):
            ang = math.radians(360.0 / SUN_RAYS * i + self.ray_angle)
            c, s = math.cos(ang), math.sin(ang)
            arcade.draw_line(cx + SUN_RADIUS * c, cy + SUN_RADIUS * s,
                             cx + (SUN_RADIUS + SUN_RAY_LENGTH) * c,
                             cy + (SUN_RADIUS + SUN_RAY_LENGTH) * s, YELLOW, 2)
        # Face
        eye = SUN_RADIUS / 2
        arcade.draw_circle_filled(cx - eye, cy + eye, 5, SKY)
        arcade.draw_circle_filled(cx + eye, cy + eye, 5, SKY)
        smile = SUN_RADIUS * 1.2
        arcade.draw_arc_outline(cx, cy, smile, smile, SKY, 180, 360, 2)

    def draw_building(self, building: Building):
        color = BUILDING_COLORS.get(building.color, BUILDING_COLORS["grey"])
        arcade.draw_lrbt_rectangle_filled(
            building.x, building.x + building.width,
            self.sy(building.ground_y), self.sy(building.top), color,
        )
        for row_idx, row in enumerate(building.windows):
            for col_idx, lit in enumerate(row):
                wx = building.x + 5 + col_idx * 20
                wy = building.top + 10 + row_idx * 20
                arcade.draw_lrbt_rectangle_filled(
                    wx, wx + 10, self.sy(wy + 10), self.sy(wy), YELLOW if lit else DARK_GREY
                )

    def draw_craters(self, snap: GameSnapshot):
        for c in snap.craters:
            arcade.draw_circle_filled(c.x, self.sy(c.y), c.radius, SKY)
        for c in snap.craters:
            if -c.radius < c.x < snap.width + c.radius and -c.radius < c.y < snap.height + c.radius:
                cy = self.sy(c.y)
                arcade.draw_line(c.x - 10, cy, c.x + 10, cy, YELLOW, 2)
                arcade.draw_line(c.x, cy - 10, c.x, cy + 10, YELLOW, 2)

    # ----------------------------
    # HUD
    # ----------------------------

    def draw_ui(self, snap: GameSnapshot):
        line = 25
        for player in (0, 1):
            x = 10 if player == 0 else self.width - 10
            anchor = "left" if player == 0 else "right"
            rows = [
                f"P{player + 1} Angle: {snap.angles[player]:.1f}°",
                f"P{player + 1} Strength: {snap.powers[player]:.1f}",
                f"Health: {max(0.0, snap.gorillas[player].health):.0f}",
                f"Score: {snap.scores[player]}",
                f"Shots: {snap.shots_fired[player]}",
            ]
            for i, text in enumerate(rows):
                arcade.draw_text(text, x, self.sy(30 + i * line), WHITE, 16, anchor_x=anchor)

        arcade.draw_text(f"Time: {snap.elapsed_time:.1f}s", self.width / 2, self.sy(30),
                         WHITE, 16, anchor_x="center")

        message = snap.message
        if snap.phase is RoundPhase.AIMING and (not message or message.endswith("Turn")):
            message = f"Player {snap.turn + 1} Turn"
        elif snap.phase is RoundPhase.ROUND_OVER:
            message = ""
        if message:
            arcade.draw_text(message, self.width / 2, self.sy(70), YELLOW, 20, anchor_x="center")

        # Turn underline
        width = 200
        if snap.turn == 0:
            left, color = 5, CYAN
        else:
            left, color = self.width - width - 5, YELLOW
        arcade.draw_lrbt_rectangle_filled(left, left + width, self.sy(20), self.sy(15), color)

    def draw_arrow(self, snap: GameSnapshot):
        gorilla = snap.gorillas[snap.turn]
        length = min(snap.powers[snap.turn] / 1.5, 180)
        rad = math.radians(snap.angles[snap.turn])

        x0, y0 = gorilla.x, self.sy(gorilla.y)
        x1, y1 = x0 + length * math.cos(rad), y0 + length * math.sin(rad)
        arcade.draw_line(x0, y0, x1, y1, WHITE, 2)

        head = 8
        for side in (-1, 1):
            ang = rad + math.pi + side * math.pi / 6
            arcade.draw_line(x1, y1, x1 + head * math.cos(ang), y1 + head * math.sin(ang), WHITE, 2)

    def draw_overlay(self, snap: GameSnapshot):
        arcade.draw_lrbt_rectangle_filled(
            self.width / 4, self.width * 3 / 4, self.height / 3, self.height * 2 / 3, OVERLAY
        )
        arcade.draw_text(snap.message, self.width / 2, self.height / 2, YELLOW, 28,
                         anchor_x="center", anchor_y="center", multiline=True,
                         width=int(self.width / 2 - 40), align="center")


class PlayWindow(GorillasWindow):
    """Interactive hot-seat game on the keyboard.

    LEFT/RIGHT turn the aim, UP/DOWN change the power, SPACE fires.
    """

    def __init__(self, game: GorillasGame):
        self.game = game
        super().__init__(game.snapshot, "Gorillas")
        self.held = set()
        self._fire_pressed = False

    def on_key_press(self, symbol: int, modifiers: int):
        self.held.add(symbol)
        if symbol == arcade.key.SPACE:
            self._fire_pressed = True
        elif symbol == arcade.key.ESCAPE:
            self.close()

    def on_key_release(self, symbol: int, modifiers: int):
        self.held.discard(symbol)

    def sample_input(self) -> InputState:
        fire, self._fire_pressed = self._fire_pressed, False
        return InputState(
            angle_up=arcade.key.LEFT in self.held,
            angle_down=arcade.key.RIGHT in self.held,
            power_up=arcade.key.UP in self.held,
            power_down=arcade.key.DOWN in self.held,
            fire=fire,
        )

    def on_update(self, delta_time: float):
        self.advance_sky(delta_time)
        self.game.update(delta_time, self.sample_input())


def play(game: Optional[GorillasGame] = None):
    """Open a window and run the game until it is closed"""
    PlayWindow(game or GorillasGame(verbose=True))
    arcade.run()
