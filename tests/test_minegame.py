import random

import pytest

from disarray.minegame import (
    KEY_DOWN,
    KEY_LEFT,
    KEY_MINE,
    KEY_RIGHT,
    MAP_HEIGHT,
    MAP_WIDTH,
    MIN_LAVA_SPEED,
    MINE_TIME,
    START_LAVA_SPEED,
    START_LIVES,
    TILE_SIZE,
    MineGame,
    Tile,
)


class _ConstantRng:
    def __init__(self, value):
        self.value = value

    def randrange(self, stop):
        return self.value % stop


def _game(seed=1):
    return MineGame(random.Random(seed))


@pytest.mark.parametrize("seed", [0, 1, 2, 42])
def test_init_map_layout(seed):
    game = _game(seed)
    assert game.tile(0, 0) == Tile.EMPTY
    assert game.tile(1, 0) == Tile.EMPTY
    assert all(game.tile(x, 0) == Tile.BRICK for x in range(2, MAP_WIDTH))
    ladders = []
    for row in range(1, MAP_HEIGHT):
        cells = [game.tile(x, row) for x in range(MAP_WIDTH)]
        assert cells.count(Tile.LADDER) == 1
        assert cells.count(Tile.BRICK) == MAP_WIDTH - 1
        ladders.append(cells.index(Tile.LADDER))
    assert all(a != b for a, b in zip(ladders, ladders[1:]))


def test_restart_resets_player():
    game = _game()
    game.player_x = 30
    game.player_frame = 4
    game.run_lava = True
    game.restart()
    assert (game.player_x, game.player_y) == (4, 4)
    assert game.player_frame == 1
    assert game.run_lava is False


def test_tile_outside_map_raises():
    game = _game()
    with pytest.raises(IndexError):
        game.tile(MAP_WIDTH, 0)
    with pytest.raises(IndexError):
        game.tile(0, -1)


def test_walk_right_stops_at_brick():
    game = _game()
    for _ in range(40):
        game.step({KEY_RIGHT})
    x = game.player_x
    game.step({KEY_RIGHT})
    assert game.player_x == x
    assert game.tile((x + 5) // TILE_SIZE, 0) == Tile.BRICK
    assert game.flip_player is False


def test_walk_left_moves_and_flips():
    game = _game()
    game.player_x = 6
    game.step({KEY_LEFT})
    assert game.player_x == 5
    assert game.flip_player is True


def test_frame_toggles_after_frame_time():
    game = _game()
    for _ in range(4):
        game.step({KEY_LEFT})
    assert game.player_frame == 1
    game.step({KEY_LEFT})
    assert game.player_frame == 2
    assert game.player_frame_timer == 0


def test_climb_down_ladder():
    game = _game()
    game.game_map[1 * MAP_WIDTH + 0] = Tile.LADDER
    game.step({KEY_DOWN})
    assert game.player_y == 5
    assert game.player_x == 4
    assert game.player_frame == 3


def test_mining_takes_mine_time_and_clears_brick():
    game = _game()
    game.rng = _ConstantRng(0)
    game.game_map[1] = Tile.BRICK
    game.step({KEY_MINE})
    assert game.player_frame == 4
    for _ in range(MINE_TIME - 1):
        game.step(())
    assert game.is_mining is True
    game.step(())
    assert game.is_mining is False
    assert game.tile(1, 0) == Tile.EMPTY
    assert game.score == 2


def test_mining_can_leave_rock():
    game = _game()
    game.rng = _ConstantRng(9)
    game.game_map[1] = Tile.BRICK
    for _ in range(MINE_TIME + 1):
        game.step({KEY_MINE})
    assert game.tile(1, 0) == Tile.ROCK
    assert game.score == 0


def test_mining_left_at_edge_targets_first_column():
    game = _game()
    game.rng = _ConstantRng(0)
    game.flip_player = True
    game.game_map[0] = Tile.BRICK
    game.game_map[1] = Tile.EMPTY
    for _ in range(MINE_TIME + 1):
        game.step({KEY_MINE})
    assert game.tile(0, 0) == Tile.EMPTY


def test_mining_last_cell_makes_exit():
    game = _game()
    game.rng = _ConstantRng(0)
    game.player_x = (MAP_WIDTH - 2) * TILE_SIZE + 4
    game.player_y = (MAP_HEIGHT - 1) * TILE_SIZE + 4
    game.game_map[-1] = Tile.BRICK
    game.game_map[(MAP_HEIGHT - 1) * MAP_WIDTH + MAP_WIDTH - 2] = Tile.EMPTY
    for _ in range(MINE_TIME + 1):
        game.step({KEY_MINE})
    assert game.tile(MAP_WIDTH - 1, MAP_HEIGHT - 1) == Tile.EXIT


def test_reaching_exit_speeds_up_lava_and_restarts():
    game = _game()
    game.player_x = 7
    game.game_map[1] = Tile.EXIT
    game.step({KEY_RIGHT})
    assert game.lava_speed < START_LAVA_SPEED
    assert game.player_x == 4


def test_lava_speed_never_below_minimum():
    game = _game()
    game.lava_speed = MIN_LAVA_SPEED + 2
    game.player_x = 7
    game.game_map[1] = Tile.EXIT
    game.step({KEY_RIGHT})
    assert game.lava_speed == MIN_LAVA_SPEED


def test_stepping_on_lava_costs_a_life():
    game = _game()
    game.lava_speed = 50
    game.game_map[0] = Tile.LAVA
    game.step(())
    assert game.lives == START_LIVES - 1
    assert game.rumble is True
    assert game.lava_speed == START_LAVA_SPEED
    assert game.tile(0, 0) == Tile.EMPTY


def test_losing_last_life_resets_score_and_lives():
    game = _game()
    game.lives = 1
    game.score = 40
    game.game_map[0] = Tile.LAVA
    game.step(())
    assert game.lives == START_LIVES
    assert game.score == 0


def test_lava_starts_when_player_descends():
    game = _game()
    game.player_y = 2 * TILE_SIZE + 4
    game.step(())
    assert game.run_lava is True
    assert game.tile(0, 0) == Tile.LAVA


def test_lava_flows_down_after_its_delay():
    game = _game()
    game.game_map = [Tile.EMPTY] * (MAP_WIDTH * MAP_HEIGHT)
    game.run_lava = True
    game.lava_speed = MIN_LAVA_SPEED
    for _ in range(MIN_LAVA_SPEED):
        game.step(())
    assert game.tile(0, 1) == Tile.EMPTY
    game.step(())
    assert game.tile(0, 1) == Tile.LAVA
    assert (game.lava_x, game.lava_y) == (0, 1)
    assert game.lava_timer == 0


def test_lava_flows_right_over_solid_floor():
    game = _game()
    game.game_map = [Tile.BRICK] * (MAP_WIDTH * MAP_HEIGHT)
    game.game_map[0] = Tile.EMPTY
    game.game_map[1] = Tile.EMPTY
    game.run_lava = True
    game.lava_speed = MIN_LAVA_SPEED
    for _ in range(MIN_LAVA_SPEED + 1):
        game.step(())
    assert game.tile(1, 0) == Tile.LAVA
    assert game.lava_y == 0