# core.py
# This file is the board engine for the 2048 game: row compaction, merging,
# transposition, random tile placement and the board predicates.

from enum import Enum
from typing import List, Tuple

Board = List[List[int]]
Row = List[int]


class DIRECTION(Enum):
    """Represents the possible move directions."""
    UP = 1
    DOWN = 2
    LEFT = 3
    RIGHT = 4


class BoardFullError(RuntimeError):
    """Raised when a tile is requested on a board without an empty cell."""

    def __init__(self, message: str = "Board has no empty cell") -> None:
        super().__init__(message)


# --- Board Helper Functions ---

def get_board_size(board: Board) -> int:
    """
    Gets the size (N) of an N x N board.
    Args:
        board (Board): The game board.
    Returns:
        int: The dimension of the board.
    Raises:
        ValueError: If the board is not square or empty.
    """
    if not board or not all(len(row) == len(board) for row in board):
        raise ValueError("Board must be a non-empty square matrix.")
    return len(board)


def _is_power_of_two(value: int) -> bool:
    return value > 0 and (value & (value - 1)) == 0


def validate_board(board: Board) -> int:
    """
    Checks that a board could have been produced by the game.
    Args:
        board (Board): The board to check.
    Returns:
        int: The dimension of the board.
    Raises:
        ValueError: If the board is not square, or a cell is neither 0 nor a power of 2.
    """
    n = get_board_size(board)
    for row in board:
        for value in row:
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(f"Board cells must be integers, got {value!r}.")
            if value != 0 and not _is_power_of_two(value):
                raise ValueError(f"Board cells must be 0 or a power of 2, got {value}.")
    return n


def has_empty_cell(board: Board) -> bool:
    for row in board:
        if 0 in row:
            return True
    return False


def contains_value(board: Board, value: int) -> bool:
    for row in board:
        if value in row:
            return True
    return False


def has_adjacent_equal_pair(board: Board) -> bool:
    """
    Looks for a pair of equal neighbours that could still merge.

    Only the right and lower neighbours of cells in rows and columns 0..N-2 are
    inspected. Every mergeable pair is seen from its lower-index member, except
    pairs lying entirely in the last row or last column.
    """
    n = len(board)
    for r in range(n - 1):
        for c in range(n - 1):
            if board[r][c] == board[r][c + 1] or board[r][c] == board[r + 1][c]:
                return True
    return False


def no_valid_moves_left(board: Board) -> bool:
    """True when the board is full and has_adjacent_equal_pair finds nothing."""
    return not has_empty_cell(board) and not has_adjacent_equal_pair(board)


def count_tiles(board: Board) -> int:
    return sum(1 for row in board for value in row if value != 0)


def render_board(board: Board) -> str:
    """Board as text: one line per row, values separated by spaces."""
    return "\n".join(" ".join(str(value) for value in row) for row in board)


# --- Tile Placement ---

def spawn_random_tile(board: Board, rng) -> Tuple[int, int]:
    """
    Places a 2 or a 4 (equal odds) on a uniformly chosen empty cell, in place.

    The cell is found by drawing (row, col) pairs until an empty one comes up.
    Args:
        board (Board): The board to modify.
        rng: Random source providing ``randrange`` (e.g. ``random.Random``).
    Returns:
        Tuple[int, int]: The (row, col) of the new tile.
    Raises:
        BoardFullError: If the board has no empty cell.
    """
    if not has_empty_cell(board):
        raise BoardFullError()

    n = len(board)
    value = 2 if rng.randrange(2) == 0 else 4

    while True:
        row = rng.randrange(n)
        col = rng.randrange(n)
        if board[row][col] == 0:
            board[row][col] = value
            return row, col


def create_board(dimension: int, rng) -> Board:
    """
    Creates an empty N x N board and seeds it with two random tiles.

    A 1 x 1 board only has room for one seed tile.
    Args:
        dimension (int): The dimension N of the board.
        rng: Random source providing ``randrange``.
    Returns:
        Board: The seeded board.
    Raises:
        ValueError: If dimension is not a positive integer.
    """
    if not isinstance(dimension, int) or isinstance(dimension, bool) or dimension <= 0:
        raise ValueError("Board size must be a positive integer.")

    board: Board = [[0] * dimension for _ in range(dimension)]
    for _ in range(2):
        if has_empty_cell(board):
            spawn_random_tile(board, rng)
    return board


# --- Line Manipulation (Core Move Logic) ---

def compact_left(row: Row) -> Row:
    """
    Slides a line to the left and merges equal neighbours.

    Scans left to right, over and over, until a pass neither slides nor merges.
    A cell that absorbed a merge keeps a mark for the rest of the call (the mark
    travels with it when it slides), so [2, 2, 2, 2] becomes [4, 4, 0, 0] and
    not [8, 0, 0, 0].
    Args:
        row (Row): The line to process. It is not modified.
    Returns:
        Row: The processed line.
    """
    line = list(row)
    merged = [False] * len(line)
    moved_or_merged = True

    while moved_or_merged:
        moved_or_merged = False
        i = 0
        while i < len(line) - 1:
            if line[i] == 0 and line[i + 1] != 0:
                line[i], line[i + 1] = line[i + 1], 0
                merged[i], merged[i + 1] = merged[i + 1], False
                moved_or_merged = True
            elif (line[i] != 0 and line[i] == line[i + 1]
                    and not merged[i] and not merged[i + 1]):
                line[i] *= 2
                line[i + 1] = 0
                merged[i] = True
                # skip the cell just emptied
                i += 1
                moved_or_merged = True
            i += 1

    return line


def mirror_combine(row: Row) -> Row:
    """Same as compact_left, but towards the right edge."""
    return compact_left(row[::-1])[::-1]


# --- Board Transformations ---

def transpose(board: Board) -> None:
    """
    Transposes a square board in place: cell (i, j) takes the old (j, i).
    Args:
        board (Board): The board to transpose.
    """
    snapshot = [list(row) for row in board]
    n = len(board)
    for i in range(n):
        for j in range(n):
            board[i][j] = snapshot[j][i]


# --- Core Game Move Processing ---

def combine_left(board: Board) -> None:
    for row in board:
        row[:] = compact_left(row)


def combine_right(board: Board) -> None:
    for row in board:
        row[:] = mirror_combine(row)


def combine_top(board: Board) -> None:
    transpose(board)
    combine_left(board)
    transpose(board)


def combine_bottom(board: Board) -> None:
    transpose(board)
    combine_right(board)
    transpose(board)


_COMBINERS = {
    DIRECTION.UP: combine_top,
    DIRECTION.DOWN: combine_bottom,
    DIRECTION.LEFT: combine_left,
    DIRECTION.RIGHT: combine_right,
}


def combine(board: Board, direction: DIRECTION) -> None:
    """
    Moves every tile of the board in the given direction, in place.
    Args:
        board (Board): The board to modify.
        direction (DIRECTION): The direction to move.
    Raises:
        ValueError: If an invalid direction is specified.
    """
    try:
        combiner = _COMBINERS[direction]
    except (KeyError, TypeError):
        raise ValueError("Invalid direction specified for combine.") from None
    combiner(board)
