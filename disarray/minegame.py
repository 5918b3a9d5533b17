"""A small digging game: mine down through bricks ahead of flowing lava."""

from __future__ import annotations

import random
from enum import IntEnum
from typing import Collection

MAP_WIDTH = 13
MAP_HEIGHT = 7
TILE_SCALE = 5
TILE_SIZE = 8

START_LAVA_SPEED = 100
MIN_LAVA_SPEED = 10
LAVA_SPEEDUP = 5
START_LIVES = 3
MINE_TIME = 30
FRAME_TIME = 5
MINE_SCORE = 2

KEY_DOWN = 1
KEY_RIGHT = 2
KEY_LEFT = 3
KEY_MINE = 4

_START_POSITION = 4
_NO_LADDER = -1


class Tile(IntEnum):
    """Map cell contents; the values are also sprite frame numbers."""

    EMPTY = 0
    EXIT = 5
    BRICK = 7
    ROCK = 8
    LAVA = 9
    LADDER = 11


_SOLID = frozenset({Tile.BRICK, Tile.ROCK})
_LAVA_FLOWS_INTO = frozenset({Tile.EMPTY, Tile.LADDER, Tile.LAVA})


def _truncating_div(a: int, b: int) -> int:
    return int(a / b)


class MineGame:
    """Map, player and lava state, advanced one frame per ``step``.

    ``rumble`` is set when the player dies; the caller clears it after use.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.game_map: list[Tile] = [Tile.EMPTY] * (MAP_WIDTH * MAP_HEIGHT)
        self.lava_speed = START_LAVA_SPEED
        self.lives = START_LIVES
        self.score = 0
        self.lava_turn_x = 0
        self.rumble = False
        self.restart()

    def init_map(self) -> None:
        """Fill the map with bricks, one ladder per row below the top."""
        ladder_x = _NO_LADDER
        for row in range(1, MAP_HEIGHT):
            column = self.rng.randrange(MAP_WIDTH)
            while column == ladder_x:
                column = self.rng.randrange(MAP_WIDTH)
            ladder_x = column
            for x in range(MAP_WIDTH):
                self._set(x, row, Tile.LADDER if x == ladder_x else Tile.BRICK)

        self._set(0, 0, Tile.EMPTY)
        self._set(1, 0, Tile.EMPTY)
        for x in range(2, MAP_WIDTH):
            self._set(x, 0, Tile.BRICK)

    def restart(self) -> None:
        """New map, player back at the start, lava stopped."""
        self.init_map()
        self.player_x = _START_POSITION
        self.player_y = _START_POSITION
        self.player_frame = 1
        self.flip_player = False
        self.player_frame_timer = 0
        self.is_mining = False
        self.mine_timer = 0
        self.lava_x = 0
        self.lava_y = 0
        self.run_lava = False
        self.lava_timer = 0
        self.lava_can_go_right = True

    def tile(self, x: int, y: int) -> Tile:
        if not (0 <= x < MAP_WIDTH and 0 <= y < MAP_HEIGHT):
            raise IndexError(f"tile ({x}, {y}) is outside the map")
        return self.game_map[y * MAP_WIDTH + x]

    def _set(self, x: int, y: int, value: Tile) -> None:
        self.game_map[y * MAP_WIDTH + x] = value

    def _at(self, x: int, y: int) -> Tile | None:
        if 0 <= x < MAP_WIDTH and 0 <= y < MAP_HEIGHT:
            return self.game_map[y * MAP_WIDTH + x]
        return None

    def _die(self) -> None:
        self.lava_speed = START_LAVA_SPEED
        self.lives -= 1
        if self.lives == 0:
            self.score = 0
            self.lives = START_LIVES
        self.rumble = True
        self.restart()

    def step(self, keys: Collection[int]) -> None:
        """Advance one frame with the given key codes held down."""
        row = self.player_y // TILE_SIZE
        if self._at(self.player_x // TILE_SIZE, row) == Tile.LAVA:
            self._die()
            return

        if not self.is_mining:
            on_floor = (self.player_y - 4) % TILE_SIZE == 0
            if KEY_LEFT in keys:
                if (self.player_x > 4 and on_floor
                        and self._at((self.player_x - 5) // TILE_SIZE, row) not in _SOLID):
                    self.player_x -= 1
                self.flip_player = True
                self.player_frame_timer += 1

            if KEY_RIGHT in keys:
                if (self.player_x < MAP_WIDTH * TILE_SIZE - 4 and on_floor
                        and self._at((self.player_x + 4) // TILE_SIZE, row) not in _SOLID):
                    self.player_x += 1
                    if self._at(self.player_x // TILE_SIZE, row) == Tile.EXIT:
                        self.lava_speed = max(self.lava_speed - LAVA_SPEEDUP, MIN_LAVA_SPEED)
                        self.restart()
                        return
                self.flip_player = False
                self.player_frame_timer += 1

            below = self._at(self.player_x // TILE_SIZE, (self.player_y + 4) // TILE_SIZE)
            if KEY_DOWN in keys and below == Tile.LADDER:
                self.player_y += 1
                self.player_x = (self.player_x // TILE_SIZE) * TILE_SIZE + 4
                self.player_frame = 3

        if self.player_frame_timer >= FRAME_TIME:
            self.player_frame_timer = 0
            self.player_frame = 2 if self.player_frame == 1 else 1

        if KEY_MINE in keys and not self.is_mining:
            self.is_mining = True
            self.mine_timer = 0
            self.player_frame = 4

        if self.is_mining:
            self._mine()

        self._flow_lava()

    def _mine(self) -> None:
        self.mine_timer += 1
        if self.mine_timer <= MINE_TIME:
            return
        self.is_mining = False
        self.player_frame = 2
        self.mine_timer = 0

        offset = -5 if self.flip_player else 5
        brick_x = _truncating_div(self.player_x + offset, TILE_SIZE)
        brick_y = self.player_y // TILE_SIZE
        current = self._at(brick_x, brick_y)
        if current is None or current in (Tile.LAVA, Tile.EMPTY):
            return

        mined = Tile.ROCK if self.rng.randrange(10) == 9 else Tile.EMPTY
        self._set(brick_x, brick_y, mined)
        if mined == Tile.EMPTY:
            self.score = (self.score + MINE_SCORE) & 0xFFFF
        if (brick_x, brick_y) == (MAP_WIDTH - 1, MAP_HEIGHT - 1):
            self._set(brick_x, brick_y, Tile.EXIT)

    def _flow_lava(self) -> None:
        if self.player_y // TILE_SIZE > 1 and not self.run_lava:
            self.run_lava = True
            self.game_map[0] = Tile.LAVA

        if not self.run_lava:
            return
        self.lava_timer += 1
        if self.lava_timer <= self.lava_speed:
            return
        self.lava_timer = 0

        x, y = self.lava_x, self.lava_y
        if y < MAP_HEIGHT - 1 and self.tile(x, y + 1) in _LAVA_FLOWS_INTO:
            self.lava_y += 1
            self.lava_turn_x = x
            self.lava_can_go_right = True
        elif (self.lava_can_go_right and x < MAP_WIDTH - 1
              and self.tile(x + 1, y) in _LAVA_FLOWS_INTO):
            self.lava_x += 1
        else:
            if self.lava_can_go_right:
                self.lava_can_go_right = False
                self.lava_x = self.lava_turn_x
            if self.lava_x > 0 and self.tile(self.lava_x - 1, self.lava_y) in _LAVA_FLOWS_INTO:
                self.lava_x -= 1

        self._set(self.lava_x, self.lava_y, Tile.LAVA)