# game.py
# This file holds the game session: one board, its winning tile, the four
# moves and the post-move refresh.

import logging
import random
from enum import Enum
from typing import Optional

import core
from core import DIRECTION, Board, BoardFullError

logger = logging.getLogger(__name__)


class Status(Enum):
    """Represents the current status of a game, derived from its board."""
    RUNNING = 1
    LOST = 2
    WON = 3


class InvalidTarget(ValueError):
    """Raised when the winning tile is not an accepted power of 2."""

    def __init__(self, message: str = "target should be a positive power of 2") -> None:
        super().__init__(message)


class NoValidMovesLeft(Exception):
    """Raised by Game.refresh when the new tile leaves the board dead-ended."""

    def __init__(self, message: str = "No valid moves left") -> None:
        super().__init__(message)


def validate_target(target: int) -> None:
    """
    Checks the winning tile of a new game.

    Powers of 2 below 5 are refused, which leaves 8 as the smallest target.
    Raises:
        InvalidTarget: If target is not an integer, not a power of 2, or below 5.
    """
    if not isinstance(target, int) or isinstance(target, bool):
        raise InvalidTarget()
    if target < 5 or (target & (target - 1)) != 0:
        raise InvalidTarget()


class Game:
    """
    A single game of 2048 on an N x N board.

    The status is never stored; get_status recomputes it from the board on
    every call. A game is not safe to share between threads.
    """

    def __init__(self, dimension: int, target: int, rng: Optional[random.Random] = None) -> None:
        """
        Args:
            dimension (int): The dimension N of the board.
            target (int): The tile value that wins the game.
            rng: Random source providing ``randrange``. Defaults to a new random.Random().
        Raises:
            InvalidTarget: If target is not accepted by validate_target.
            ValueError: If dimension is not a positive integer.
        """
        validate_target(target)
        self._rng = rng if rng is not None else random.Random()
        self._target = target
        self._board: Board = core.create_board(dimension, self._rng)
        logger.debug("New %dx%d game with target %d", dimension, dimension, target)

    @classmethod
    def from_board(cls, board: Board, target: int, rng: Optional[random.Random] = None) -> "Game":
        """
        Resumes a game from an existing board. The board is copied.
        Raises:
            InvalidTarget: If target is not accepted by validate_target.
            ValueError: If the board is not square or holds a value that is not 0 or a power of 2.
        """
        validate_target(target)
        core.validate_board(board)
        game = cls.__new__(cls)
        game._rng = rng if rng is not None else random.Random()
        game._target = target
        game._board = [list(row) for row in board]
        return game

    @property
    def board(self) -> Board:
        """Copy of the current board, row-major."""
        return [list(row) for row in self._board]

    @property
    def target(self) -> int:
        return self._target

    @property
    def dimension(self) -> int:
        return len(self._board)

    def get_status(self) -> Status:
        if core.contains_value(self._board, self._target):
            return Status.WON
        if core.no_valid_moves_left(self._board):
            return Status.LOST
        return Status.RUNNING

    def combine_left(self) -> None:
        core.combine_left(self._board)

    def combine_right(self) -> None:
        core.combine_right(self._board)

    def combine_top(self) -> None:
        core.combine_top(self._board)

    def combine_bottom(self) -> None:
        core.combine_bottom(self._board)

    def move(self, direction: DIRECTION) -> None:
        """
        Applies one of the four moves. A move that changes nothing is not an error.
        Raises:
            ValueError: If an invalid direction is specified.
        """
        logger.debug("Move %s", direction)
        core.combine(self._board, direction)

    def refresh(self) -> None:
        """
        Adds one random tile, then checks whether any move is left.

        Call it once per turn, after the move and the status check.
        Raises:
            BoardFullError: If the board had no empty cell; nothing is added.
            NoValidMovesLeft: If the board is dead-ended once the tile is added.
        """
        if not core.has_empty_cell(self._board):
            raise BoardFullError()

        row, col = core.spawn_random_tile(self._board, self._rng)
        logger.debug("Spawned %d at (%d, %d)", self._board[row][col], row, col)

        if core.no_valid_moves_left(self._board):
            logger.info("No valid moves left after refresh")
            raise NoValidMovesLeft()

    def render(self) -> str:
        return core.render_board(self._board)
