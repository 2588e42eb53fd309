# cli_driver.py
# This file is intended to be run to play the 2048 game on the CLI.
# Usage: play2048 <board_dimension> [target]

import argparse
import logging
from typing import List, Optional

from config import load_settings
from core import DIRECTION, BoardFullError
from game import Game, NoValidMovesLeft, Status

logger = logging.getLogger(__name__)

CLEAR_SCREEN = "\x1b[2J"

COMMANDS = {'a': DIRECTION.LEFT, 'd': DIRECTION.RIGHT, 'w': DIRECTION.UP, 's': DIRECTION.DOWN}


def build_parser(default_target: int) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="play2048", description="Play 2048 in the terminal.")
    parser.add_argument("dimension", type=int, help="board dimension, a positive number")
    parser.add_argument(
        "target", type=int, nargs="?", default=default_target,
        help=f"winning tile, a power of 2 of at least 8 (default {default_target})"
    )
    return parser


def play(game: Game) -> Status:
    """Runs the input loop until the game ends or the player quits."""
    print("Use a,s,d,w to move left, bottom, right and top. q to quit. Good luck!")

    while True:
        print(game.render())

        try:
            command = input().strip()
        except EOFError:
            return game.get_status()

        # Anything other than a single character is ignored
        if len(command) != 1:
            continue
        if command == 'q':
            return game.get_status()
        if command not in COMMANDS:
            print("Unrecognized input")
            continue

        game.move(COMMANDS[command])

        status = game.get_status()
        if status == Status.WON:
            print("Congratulations, you have won!")
            print(game.render())
            return status
        if status == Status.LOST:
            print("Game over!")
            print(game.render())
            return status

        try:
            game.refresh()
        except NoValidMovesLeft:
            print("Game over!")
            print(game.render())
            return Status.LOST
        except BoardFullError:
            # Full board that can still merge; nothing to add this turn
            logger.debug("Board full, no tile added")

        print(CLEAR_SCREEN, end="")


def main(argv: Optional[List[str]] = None) -> int:
    settings = load_settings()
    logging.basicConfig(level=settings.log_level)

    parser = build_parser(settings.default_target)
    args = parser.parse_args(argv)

    try:
        game = Game(args.dimension, args.target)
    except ValueError as e:
        # InvalidTarget or a non-positive dimension
        parser.error(str(e))

    status = play(game)
    logger.info("Game finished with status %s", status.name)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
