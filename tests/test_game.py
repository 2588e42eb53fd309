import random

import pytest

import core
from core import DIRECTION, BoardFullError
from game import Game, InvalidTarget, NoValidMovesLeft, Status, validate_target


@pytest.mark.parametrize("target", [6, 1, 2, 4, 0, -8, 3, 12, 2047, 8.0, "2048", True])
def test_invalid_targets_are_rejected(target):
    with pytest.raises(InvalidTarget):
        Game(4, target, rng=random.Random(0))


@pytest.mark.parametrize("target", [8, 16, 2048, 65536])
def test_power_of_two_targets_from_eight_are_accepted(target):
    validate_target(target)


def test_invalid_target_is_a_value_error():
    with pytest.raises(ValueError, match="target should be a positive power of 2"):
        Game(4, 6)


def test_new_game_has_two_seed_tiles():
    game = Game(4, 2048, rng=random.Random(42))
    values = [v for row in game.board for v in row if v != 0]
    assert game.dimension == 4
    assert game.target == 2048
    assert len(values) == 2
    assert all(v in (2, 4) for v in values)
    assert game.get_status() == Status.RUNNING


def test_new_game_uses_injected_rng(scripted_rng):
    # 2 at (0, 0), then 4 at (1, 1)
    game = Game(2, 8, rng=scripted_rng([0, 0, 0, 1, 1, 1]))
    assert game.board == [[2, 0], [0, 4]]


def test_new_game_rejects_bad_dimension():
    with pytest.raises(ValueError):
        Game(0, 2048)


def test_board_accessor_returns_a_copy():
    game = Game.from_board([[2, 0], [0, 0]], 8)
    board = game.board
    board[0][0] = 4
    assert game.board == [[2, 0], [0, 0]]


def test_from_board_copies_input():
    board = [[2, 2], [0, 0]]
    game = Game.from_board(board, 8)
    game.combine_left()
    assert board == [[2, 2], [0, 0]]
    assert game.board == [[4, 0], [0, 0]]


def test_from_board_validates():
    with pytest.raises(ValueError):
        Game.from_board([[2, 0, 0], [0, 0, 0]], 8)
    with pytest.raises(InvalidTarget):
        Game.from_board([[2, 0], [0, 0]], 6)


def test_status_won_when_target_present_anywhere():
    # Full and dead-ended, but the target is on the board.
    game = Game.from_board([[8, 2], [4, 16]], 8)
    assert game.get_status() == Status.WON


def test_status_lost_on_full_board_without_pairs():
    game = Game.from_board([[2, 4], [4, 2]], 2048)
    assert game.get_status() == Status.LOST


def test_status_running_on_full_board_with_pair():
    game = Game.from_board([[2, 2], [4, 8]], 2048)
    assert game.get_status() == Status.RUNNING


def test_status_lost_when_only_pair_is_in_last_row():
    # The 8,8 pair is not inspected by the loss check.
    game = Game.from_board([[2, 4], [8, 8]], 2048)
    assert game.get_status() == Status.LOST


def test_status_does_not_change_board():
    game = Game.from_board([[2, 2], [0, 0]], 2048)
    game.get_status()
    assert game.board == [[2, 2], [0, 0]]


def test_directional_moves():
    start = [[2, 0, 2], [0, 0, 0], [2, 0, 0]]

    game = Game.from_board(start, 2048)
    game.combine_left()
    assert game.board == [[4, 0, 0], [0, 0, 0], [2, 0, 0]]

    game = Game.from_board(start, 2048)
    game.combine_right()
    assert game.board == [[0, 0, 4], [0, 0, 0], [0, 0, 2]]

    game = Game.from_board(start, 2048)
    game.combine_top()
    assert game.board == [[4, 0, 2], [0, 0, 0], [0, 0, 0]]

    game = Game.from_board(start, 2048)
    game.combine_bottom()
    assert game.board == [[0, 0, 0], [0, 0, 0], [4, 0, 2]]


def test_move_dispatches_and_rejects_unknown():
    game = Game.from_board([[0, 2], [0, 2]], 2048)
    game.move(DIRECTION.DOWN)
    assert game.board == [[0, 0], [0, 4]]
    with pytest.raises(ValueError):
        game.move("down")


def test_move_reaching_target_wins():
    game = Game.from_board([[4, 4], [0, 0]], 8)
    game.combine_left()
    assert game.get_status() == Status.WON


def test_refresh_adds_one_tile(scripted_rng):
    game = Game.from_board([[2, 0], [0, 0]], 2048, rng=scripted_rng([1, 0, 1]))
    game.refresh()
    assert game.board == [[2, 4], [0, 0]]


def test_refresh_raises_when_new_tile_leaves_no_moves(scripted_rng):
    game = Game.from_board([[2, 4], [4, 0]], 2048, rng=scripted_rng([0, 1, 1]))
    with pytest.raises(NoValidMovesLeft):
        game.refresh()
    assert game.board == [[2, 4], [4, 2]]
    assert game.get_status() == Status.LOST


def test_refresh_on_full_board_fails_fast(scripted_rng):
    game = Game.from_board([[2, 2], [4, 8]], 2048, rng=scripted_rng([]))
    with pytest.raises(BoardFullError):
        game.refresh()
    assert game.board == [[2, 2], [4, 8]]


def test_only_refresh_increases_tile_count():
    game = Game(4, 2048, rng=random.Random(1234))
    for _ in range(200):
        before = core.count_tiles(game.board)
        game.combine_left()
        after_move = core.count_tiles(game.board)
        assert after_move <= before
        try:
            game.refresh()
        except NoValidMovesLeft:
            assert core.count_tiles(game.board) == after_move + 1
            break
        except BoardFullError:
            assert core.count_tiles(game.board) == after_move
            break
        assert core.count_tiles(game.board) == after_move + 1


def test_render():
    game = Game.from_board([[2, 0], [0, 16]], 2048)
    assert game.render() == "2 0\n0 16"
