"""Game rules of a match-three brawler: chains of tiles drive the fighters."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from .particles import Color

BOARD_X = 16
BOARD_Y = 445
TILE_SIZE = 64
ROWS = 6
COLUMNS = 7
TILE_KINDS = 4
MIN_CHAIN = 3
WEAPON_THRESHOLD = 2
ENEMY_DAMAGE = 30
STEP = 4

PLAYER_HOME_X = 100.0
PLAYER_ATTACK_X = 250.0
ENEMY_HOME_X = 380.0
ENEMY_ATTACK_X = 230.0
FIGHTER_Y = 280.0

IDLE, PUNCH, DEATH = 0, 1, 2

Rect = tuple[float, float, float, float, Color]


@dataclass(frozen=True)
class Animation:
    """An inclusive range of model frames."""

    start_frame: int
    end_frame: int


DEFAULT_ANIMATIONS = (
    Animation(0, 23),
    Animation(59, 79),
    Animation(102, 116),
)


@dataclass
class Gopnik:
    """A fighter with health and an animation state."""

    x: float = 0.0
    y: float = 0.0
    health: int = 0
    max_health: int = 0
    anim_frame: int = 0
    current_animation: int = IDLE
    next_animation: int = IDLE

    def animate(self, animations: Sequence[Animation]) -> None:
        """Advance one frame, switching to the queued animation at the end."""
        self.anim_frame += 1
        if self.anim_frame > animations[self.current_animation].end_frame:
            self.anim_frame = animations[self.next_animation].start_frame
            self.current_animation = self.next_animation
            self.next_animation = IDLE

    def hud_bar(self) -> tuple[Rect, Rect]:
        """Centred background and health rectangles as ``(x, y, w, h, color)``."""
        background = (self.x, self.y + 100, 102.0, 7.0, Color(0, 0, 0, 0.8))
        hp = max(self.health, 0)
        bar_size = 100 * (hp / float(self.max_health))
        bar = (self.x - (100 * 0.5 - bar_size * 0.5), self.y + 100,
               bar_size, 5.0, Color(1, 0, 0, 1))
        return background, bar


@dataclass(frozen=True)
class ChainElement:
    x: int
    y: int
    value: int


class GameMode(Enum):
    TITLE = "title"
    GAME = "game"


@dataclass
class Touches:
    """Screen touches of one frame as ``(x, y)`` pairs."""

    down: list[tuple[float, float]] = field(default_factory=list)
    up: list[tuple[float, float]] = field(default_factory=list)
    move: list[tuple[float, float]] = field(default_factory=list)


class Match3Game:
    """Board, chain and fighters, advanced one frame at a time."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.animations: list[Animation] = list(DEFAULT_ANIMATIONS)
        self.board: list[list[int]] = []
        self.chain: list[ChainElement] = []
        self.player = Gopnik()
        self.enemy = Gopnik()
        self.mode = GameMode.TITLE
        self.tiles_fall = False
        self.tile_falling_progress = 0.0
        self.restart()

    def _random_tile(self) -> int:
        return self.rng.randrange(TILE_KINDS) + 1

    def restart(self) -> None:
        """Deal a new board and reset both fighters."""
        self.board = [[self._random_tile() for _ in range(COLUMNS)] for _ in range(ROWS)]
        self.chain = []

        self.player.x, self.player.y = PLAYER_HOME_X, FIGHTER_Y
        self.player.max_health = 100
        self.player.health = self.player.max_health
        self.player.next_animation = IDLE
        self.player.current_animation = IDLE

        self.enemy.x, self.enemy.y = ENEMY_HOME_X, FIGHTER_Y
        self.enemy.max_health = 50
        self.enemy.health = self.enemy.max_health
        self.enemy.next_animation = IDLE
        self.enemy.current_animation = IDLE

        self.player_damage = 0
        self.input_blocked = False
        self.move_player_forward = False
        self.move_player_backward = False
        self.move_enemy_forward = False
        self.move_enemy_backward = False
        self.chain_destroyed = False
        self.destruction_progress = 0.0

    def add_tile_if_touched(self, x: float, y: float) -> None:
        """Extend the chain with the touched tile, or step back along it."""
        if not (BOARD_X < x < BOARD_X + COLUMNS * TILE_SIZE
                and BOARD_Y < y < BOARD_Y + ROWS * TILE_SIZE):
            return
        col = int((x - BOARD_X) / TILE_SIZE)
        row = int((y - BOARD_Y) / TILE_SIZE)
        element = ChainElement(col, row, self.board[row][col])

        found = element in self.chain
        if self.chain:
            last = self.chain[-1]
            matches = last.value == element.value
            adjacent = abs(last.x - element.x) <= 1 and abs(last.y - element.y) <= 1
        else:
            last = None
            matches = True
            adjacent = True

        if found and adjacent and last is not None and (last.x, last.y) != (col, row):
            self.chain.pop()
            return
        if not found and matches and adjacent:
            self.chain.append(element)

    def gravity(self) -> None:
        """Drop tiles one row into gaps below and refill the top row."""
        for h in range(ROWS - 2, -1, -1):
            for i in range(COLUMNS):
                if self.board[h + 1][i] == 0 and self.board[h][i]:
                    self.board[h + 1][i] = self.board[h][i]
                    self.board[h][i] = 0
                if h == 0 and self.board[h][i] == 0:
                    self.board[h][i] = self._random_tile()

    def on_chain_finish(self) -> None:
        """Clear the chained tiles and attack or heal by their kind."""
        if not self.chain:
            raise ValueError("the chain is empty")
        for element in self.chain:
            self.board[element.y][element.x] = 0
        self.chain_destroyed = True

        if self.chain[0].value > WEAPON_THRESHOLD:
            self.move_player_forward = True
            self.player_damage = 2 * len(self.chain)
        else:
            self.input_blocked = True
            self.player.health = min(self.player.health + len(self.chain) * 10,
                                     self.player.max_health)
            self.move_enemy_forward = True

    def update(self, touches: Touches, delta_time: float) -> None:
        """Advance the game by one frame."""
        if self.mode is GameMode.TITLE:
            if touches.up:
                self.restart()
                self.mode = GameMode.GAME
            return
        self._play(touches, delta_time)

    def _play(self, touches: Touches, delta_time: float) -> None:
        if touches.down and not self.input_blocked:
            self.add_tile_if_touched(*touches.down[0])
        if touches.move and not self.input_blocked:
            self.add_tile_if_touched(*touches.move[0])
        if touches.up and not self.input_blocked:
            if len(self.chain) >= MIN_CHAIN:
                self.on_chain_finish()
            self.chain = []

        if self.chain_destroyed:
            self.destruction_progress += delta_time
            if self.destruction_progress >= 1.0:
                self.chain_destroyed = False
                self.destruction_progress = 0.0
        else:
            if not self.tiles_fall:
                self.gravity()
                self.tiles_fall = True
            self.tile_falling_progress += delta_time
            if self.tile_falling_progress >= 0.5:
                self.tile_falling_progress = 0.0
                self.tiles_fall = False

        self._move_fighters()
        self.player.animate(self.animations)
        self.enemy.animate(self.animations)
        self._resolve_hits()

    def _move_fighters(self) -> None:
        if self.move_player_forward:
            self.player.x += STEP
            if self.player.x > PLAYER_ATTACK_X:
                self.player.x = PLAYER_ATTACK_X
                self.move_player_forward = False
                self.player.next_animation = PUNCH
                self.input_blocked = True

        if self.move_player_backward:
            self.player.x -= STEP
            if self.player.x <= PLAYER_HOME_X:
                self.move_player_backward = False
                self.move_enemy_forward = True

        if self.move_enemy_forward:
            self.enemy.x -= STEP
            if self.enemy.x <= ENEMY_ATTACK_X:
                self.move_enemy_forward = False
                self.enemy.next_animation = PUNCH

        if self.move_enemy_backward:
            self.enemy.x += STEP
            if self.enemy.x >= ENEMY_HOME_X:
                self.move_enemy_backward = False
                self.input_blocked = False

    def _finished(self, fighter: Gopnik, animation: int) -> bool:
        return (fighter.current_animation == animation
                and fighter.anim_frame == self.animations[animation].end_frame)

    def _resolve_hits(self) -> None:
        if self._finished(self.player, PUNCH):
            self.enemy.health -= self.player_damage
            if self.enemy.health <= 0:
                self.enemy.next_animation = DEATH
            self.move_player_backward = True

        if self._finished(self.enemy, PUNCH):
            self.player.health -= ENEMY_DAMAGE
            if self.player.health < 0:
                self.player.next_animation = DEATH
            self.move_enemy_backward = True

        if self._finished(self.enemy, DEATH) or self._finished(self.player, DEATH):
            self.mode = GameMode.TITLE

    def chain_geometry(self) -> tuple[list[tuple[float, float]], list[Color]]:
        """Triangles joining consecutive chain tiles: six points per link."""
        points: list[tuple[float, float]] = []
        half_tile = TILE_SIZE // 2
        for prev, cur in zip(self.chain, self.chain[1:]):
            half = 12 if prev.x != cur.x and prev.y != cur.y else 8
            px = BOARD_X + prev.x * TILE_SIZE + half_tile
            py = BOARD_Y + prev.y * TILE_SIZE + half_tile
            cx = BOARD_X + cur.x * TILE_SIZE + half_tile
            cy = BOARD_Y + cur.y * TILE_SIZE + half_tile
            if prev.y == cur.y:
                p0 = (px, py - half)
                p2 = (cx, cy + half)
                points += [p0, (cx, cy - half), p2, p0, p2, (px, py + half)]
            else:
                p0 = (px - half, py)
                p2 = (cx + half, cy)
                points += [p0, (px + half, py), p2, p0, (cx - half, cy), p2]
        colors = [Color(1.0, 0.0, 0.0, 1.0)] * len(points)
        return points, colors