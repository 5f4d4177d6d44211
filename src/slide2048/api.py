import logging
import random
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel, Field, field_validator
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from slide2048 import core
from slide2048.config import GameSettings

logger = logging.getLogger(__name__)

settings = GameSettings.from_env()

# Initialize the rate limiter
limiter = Limiter(key_func=get_remote_address)
app = FastAPI(
    title="2048 Game API",
    description="A stateless API for playing the 2048 game. "\
                "Manage your game state (board, score) on the client side.",
    version="1.0.0"
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# --- Pydantic Models for API requests and responses ---

class NewGameSettings(BaseModel):
    """Settings for creating a new game."""
    size: int = Field(
        default=settings.board_size,
        description=f"Size of the N x N game board, one of {list(core.ALLOWED_SIZES)}."
    )
    seed: Optional[int] = Field(
        default=None,
        description="Optional seed making the initial tile placement reproducible."
    )

    @field_validator("size")
    @classmethod
    def _check_size(cls, value: int) -> int:
        if value not in core.ALLOWED_SIZES:
            raise ValueError(f"size must be one of {list(core.ALLOWED_SIZES)}")
        return value

class GameStateData(BaseModel):
    """Represents the complete state of a game instance."""
    board: List[List[int]] = Field(..., description="The N x N game board, represented as a list of lists.")
    score: int = Field(..., ge=0, description="Current score of the game.")
    progress: core.GameProgressState = Field(
        ...,
        description="Current progress state of the game (IN_PROGRESS, GAME_WON, GAME_OVER)."
    )
    board_size: int = Field(..., gt=0, description="The dimension N of the N x N board.")
    max_tile: int = Field(..., ge=0, description="Largest tile currently on the board.")

class MoveRequestData(BaseModel):
    """Data required to make a move."""
    board: List[List[int]] = Field(..., description="Current N x N game board state before the move.")
    score: int = Field(..., ge=0, description="Current score before the move.")
    direction: core.Direction = Field(
        ...,
        description="Direction of the move (up, down, left, right)."
    )
    seed: Optional[int] = Field(
        default=None,
        description="Optional seed making the spawned tile reproducible."
    )

class MoveResponseData(GameStateData):
    """Response after a move, including the new game state and move effectiveness."""
    moved: bool = Field(
        ...,
        description="True if the move resulted in a change to the board state, False otherwise."
    )
    message: Optional[str] = Field(
        default=None,
        description="An optional message, e.g., if a move was invalid, game ended, or other info."
    )

class BoardSizesData(BaseModel):
    sizes: List[int]
    default: int

_shared_rng = settings.make_rng()

def _rng_for(seed: Optional[int]) -> random.Random:
    if seed is not None:
        return random.Random(seed)
    return _shared_rng

# --- API Endpoints ---

@app.get("/game/sizes", response_model=BoardSizesData, summary="List Supported Board Sizes")
@limiter.limit(settings.rate_limit)
async def list_sizes(request: Request):
    return BoardSizesData(sizes=list(core.ALLOWED_SIZES), default=settings.board_size)

@app.post("/game/new", response_model=GameStateData, summary="Start a New 2048 Game")
@limiter.limit(settings.rate_limit)
async def start_new_game(request: Request, new_game: NewGameSettings):
    """
    Initializes a new 2048 game of the requested size.

    - **size**: Dimension of the N x N board (3, 4, 5 or 6). Default is 4.
    - **seed**: Optional seed for reproducible tile placement.

    Returns the initial game state: the board with two random tiles,
    score (0) and progress status (IN_PROGRESS).
    """
    try:
        initial_board = core.initialize_board(new_game.size, _rng_for(new_game.seed))
        return GameStateData(
            board=initial_board,
            score=0,
            progress=core.determine_game_status(initial_board),
            board_size=new_game.size,
            max_tile=core.get_max_tile(initial_board)
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Unexpected error in /game/new")
        raise HTTPException(status_code=500, detail=f"An unexpected error occurred during game creation: {str(e)}")


@app.post("/game/move", response_model=MoveResponseData, summary="Make a Move in the Game")
@limiter.limit(settings.rate_limit)
async def make_move(request: Request, request_data: MoveRequestData):
    """
    Processes a player's move in the game.

    Requires the current `board` state, `score` and the `direction` of the move.

    The API will:
    1. Slide and merge the tiles in the chosen direction.
    2. If the move changed the board, add a new random tile (2 or 4).
    3. Determine the new game status (IN_PROGRESS, GAME_WON, GAME_OVER).

    Returns the updated game state, whether the move changed the board, and an optional message.
    """
    current_board = request_data.board

    try:
        board_size = core.get_board_size(current_board)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid board structure in request: {str(e)}")

    final_board = core.copy_board(current_board)
    final_score = request_data.score
    message_for_client: Optional[str] = None

    try:
        board_after_slide, score_increase, moved = core.process_move(
            current_board, request_data.direction
        )

        if moved:
            final_board = board_after_slide
            final_score += score_increase
            # The spawn always follows the slide it belongs to
            final_board = core.add_random_tile(final_board, _rng_for(request_data.seed))
        else:
            message_for_client = "Move was not effective; board state unchanged by slide."

        current_progress = core.determine_game_status(final_board)
        if current_progress == core.GameProgressState.GAME_WON:
            message_for_client = "Congratulations! You won!"
        elif current_progress == core.GameProgressState.GAME_OVER:
            message_for_client = "Game Over. No more valid moves."

        return MoveResponseData(
            board=final_board,
            score=final_score,
            progress=current_progress,
            board_size=board_size,
            max_tile=core.get_max_tile(final_board),
            moved=moved,
            message=message_for_client
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Error processing move: {str(e)}")
    except Exception as e:
        logger.exception("Unexpected error in /game/move")
        raise HTTPException(status_code=500, detail=f"An unexpected server error occurred while processing the move: {str(e)}")
