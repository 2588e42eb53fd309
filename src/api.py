import logging
import random

from fastapi import Depends, FastAPI, HTTPException, Request
from pydantic import BaseModel, Field
from typing import List, Optional
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from config import load_settings
from core import DIRECTION, BoardFullError
from game import Game, NoValidMovesLeft, Status

logger = logging.getLogger(__name__)
settings = load_settings()

# Initialize the rate limiter
limiter = Limiter(key_func=get_remote_address)
app = FastAPI(
    title="2048 Game API",
    description="A stateless API for playing the 2048 game. "\
                "Manage your game state (board, win_tile) on the client side.",
    version="1.0.0"
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


def get_rng() -> random.Random:
    """Random source for tile placement; overridden in tests."""
    return random.Random()

# --- Pydantic Models for API requests and responses ---

class NewGameSettings(BaseModel):
    """Settings for creating a new game."""
    size: Optional[int] = Field(
        default=settings.default_size,
        ge=1,
        description="Size of the N x N game board (e.g., 4 for a 4x4 board)."
    )
    win_tile: Optional[int] = Field(
        default=settings.default_target,
        gt=0,
        description="The tile value to achieve for winning the game: a power of 2, at least 8."
    )

class GameStateData(BaseModel):
    """Represents the complete state of a game instance."""
    board: List[List[int]] = Field(..., description="The N x N game board, represented as a list of lists.")
    progress: Status = Field(
        ...,
        description="Current status of the game (RUNNING, LOST, WON)."
    )
    win_tile: int = Field(..., gt=0, description="The tile value required to win this game instance.")
    board_size: int = Field(..., gt=0, description="The dimension N of the N x N board.")


class MoveRequestData(BaseModel):
    """Data required to make a move."""
    board: List[List[int]] = Field(..., description="Current N x N game board state before the move.")
    direction: DIRECTION = Field(
        ...,
        description="Direction of the move (1=UP, 2=DOWN, 3=LEFT, 4=RIGHT)."
    )
    win_tile: int = Field(..., gt=0, description="The win condition tile for this game instance.")
    # board_size is implicitly derived from the board structure.

class MoveResponseData(GameStateData):
    """Response after a move, with the new game state."""
    message: Optional[str] = Field(
        default=None,
        description="An optional message, e.g., if the game ended or no tile could be added."
    )

# --- API Endpoints ---

@app.get("/healthcheck")
async def healthcheck() -> dict:
    return {"status": "ok"}


@app.post("/game/new", response_model=GameStateData, summary="Start a New 2048 Game")
@limiter.limit(settings.rate_limit)
async def start_new_game(request: Request, new_game: NewGameSettings, rng: random.Random = Depends(get_rng)):
    """
    Initializes a new 2048 game based on the provided settings (size and win_tile).

    - **size**: Dimension of the N x N board (e.g., 4 for 4x4). Default is 4.
    - **win_tile**: Tile value to reach to win (e.g., 2048). Default is 2048.

    Returns the initial game state: the board with two random tiles (each 2 or 4),
    its status and the specified win_tile.
    """
    size = new_game.size if new_game.size is not None else settings.default_size
    win_tile = new_game.win_tile if new_game.win_tile is not None else settings.default_target

    try:
        game = Game(size, win_tile, rng=rng)

        return GameStateData(
            board=game.board,
            progress=game.get_status(),
            win_tile=game.target,
            board_size=game.dimension
        )
    except ValueError as e:
        # InvalidTarget and invalid sizes
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Unexpected error in /game/new: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"An unexpected error occurred during game creation: {str(e)}")


@app.post("/game/move", response_model=MoveResponseData, summary="Make a Move in the Game")
@limiter.limit(settings.rate_limit)
async def make_move(request: Request, request_data: MoveRequestData, rng: random.Random = Depends(get_rng)):
    """
    Processes a player's move in the game.

    Requires the current `board` state, the `direction` of the move,
    and the `win_tile` for this game instance.

    The API will:
    1. Slide and merge the tiles in the chosen direction.
    2. Check whether the game is won or lost.
    3. If it is still running, add a new random tile (2 or 4) and check again.

    Returns the updated game state and an optional message.
    """
    try:
        game = Game.from_board(request_data.board, request_data.win_tile, rng=rng)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid game state in request: {str(e)}")

    message_for_client: Optional[str] = None

    try:
        # Step 1: Slide and merge
        game.move(request_data.direction)

        # Step 2: Check for a terminal state before adding a tile
        progress = game.get_status()

        # Step 3: Add a tile; this can end the game too
        if progress == Status.RUNNING:
            try:
                game.refresh()
            except NoValidMovesLeft:
                progress = Status.LOST
            except BoardFullError:
                message_for_client = "No empty cell for a new tile."

        if progress == Status.WON:
            message_for_client = "Congratulations! You won!"
        elif progress == Status.LOST:
            message_for_client = "Game Over. No more valid moves."

        return MoveResponseData(
            board=game.board,
            progress=progress,
            win_tile=game.target,
            board_size=game.dimension,
            message=message_for_client
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Error processing move: {str(e)}")
    except Exception as e:
        logger.error(f"Unexpected error in /game/move: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"An unexpected server error occurred while processing the move: {str(e)}")
