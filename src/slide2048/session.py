# session.py
# Holds the state of one game in progress and drives the board engine.

import logging
import random
from typing import Any, Dict, Optional, Union

from slide2048 import core
from slide2048.core import ALLOWED_SIZES, DEFAULT_SIZE, Board, Direction, GameProgressState

logger = logging.getLogger(__name__)

class InvalidBoardSizeError(ValueError):
    """Raised when a board size outside ALLOWED_SIZES is requested."""

def validate_size(size: int) -> int:
    if not isinstance(size, int) or isinstance(size, bool) or size not in ALLOWED_SIZES:
        raise InvalidBoardSizeError(
            f"Board size {size!r} is not supported; choose one of {list(ALLOWED_SIZES)}."
        )
    return size

class GameSession:
    """
    Caller-side state for a single game: board, score and best score.

    The engine is only ever handed copies of the board. After an accepted
    move the slid board and score are committed before the new tile is
    spawned, and exactly one tile is spawned per accepted move.
    """

    def __init__(self, size: int = DEFAULT_SIZE, rng: Optional[random.Random] = None):
        self.size = validate_size(size)
        self.rng = rng if rng is not None else random.Random()
        self.best_score = 0
        self.reset()

    def reset(self) -> None:
        """Starts a new game at the current size. The best score is kept."""
        self.board: Board = core.initialize_board(self.size, self.rng)
        self.score = 0
        self.moves = 0
        self.won = False
        self.game_over = False
        self._refresh_flags()
        logger.debug("New %dx%d game started", self.size, self.size)

    def change_size(self, size: int) -> None:
        self.size = validate_size(size)
        self.reset()

    def make_move(self, direction: Union[Direction, str]) -> bool:
        """
        Applies a move and, if it changed the board, spawns one new tile.
        Args:
            direction (Direction | str): The direction to slide.
        Returns:
            bool: True if the move was accepted (the board changed).
        Raises:
            ValueError: If the direction is unknown.
        """
        if self.game_over:
            return False

        new_board, score_delta, moved = core.process_move(self.board, direction)
        if not moved:
            logger.debug("Move %s left the board unchanged", direction)
            return False

        self.board = new_board
        self.score += score_delta
        self.moves += 1
        self.board = core.add_random_tile(self.board, self.rng)

        if self.score > self.best_score:
            self.best_score = self.score
        self._refresh_flags()
        logger.debug("Move %s accepted: +%d (score %d)", direction, score_delta, self.score)
        return True

    def _refresh_flags(self) -> None:
        if not self.won and core.has_won(self.board):
            self.won = True
            logger.info("Reached %d after %d moves", core.WIN_TILE, self.moves)
        if not self.game_over and core.is_game_over(self.board):
            self.game_over = True
            logger.info("Game over with score %d", self.score)

    @property
    def status(self) -> str:
        if self.won:
            return "won"
        if self.game_over:
            return "gameOver"
        return "playing"

    @property
    def progress(self) -> GameProgressState:
        if self.won:
            return GameProgressState.GAME_WON
        if self.game_over:
            return GameProgressState.GAME_OVER
        return GameProgressState.IN_PROGRESS

    def snapshot(self) -> Dict[str, Any]:
        return {
            "board": core.copy_board(self.board),
            "score": self.score,
            "best_score": self.best_score,
            "size": self.size,
            "moves": self.moves,
            "status": self.status,
        }
