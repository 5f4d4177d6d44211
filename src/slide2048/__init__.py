"""
Sliding-tile (2048) game.

Modules:
- core.py: stateless board engine (slide, merge, spawn, win/terminal checks)
- session.py: GameSession, the state of one game in progress
- config.py: GameSettings loaded from SLIDE2048_* environment variables
- api.py: stateless FastAPI service
- cli_driver.py: terminal game loop
"""
from slide2048.core import (
    ALLOWED_SIZES,
    WIN_TILE,
    Direction,
    GameProgressState,
    add_random_tile,
    can_move,
    create_empty_board,
    get_empty_cells,
    has_won,
    initialize_board,
    is_game_over,
    process_move,
    slide_row_left,
)
from slide2048.session import GameSession, InvalidBoardSizeError

__version__ = "1.0.0"
