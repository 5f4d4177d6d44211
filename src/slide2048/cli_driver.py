# cli_driver.py
# Play the game in a terminal.

import argparse
import logging
from typing import Callable, List, Optional

from pydantic import ValidationError

from slide2048.config import GameSettings, configure_logging
from slide2048.core import ALLOWED_SIZES, Board, Direction
from slide2048.session import GameSession, InvalidBoardSizeError

logger = logging.getLogger(__name__)

KEY_MAP = {
    'W': Direction.UP, 'UP': Direction.UP,
    'A': Direction.LEFT, 'LEFT': Direction.LEFT,
    'S': Direction.DOWN, 'DOWN': Direction.DOWN,
    'D': Direction.RIGHT, 'RIGHT': Direction.RIGHT,
}

def parse_move(text: str) -> Optional[Direction]:
    """Maps a line of player input to a direction, or None if it is not a move."""
    return KEY_MAP.get(text.strip().upper())

def build_parser(defaults: GameSettings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Play 2048 in the terminal')
    parser.add_argument('--size', type=int, choices=ALLOWED_SIZES, default=defaults.board_size,
                        help='Board size (NxN)')
    parser.add_argument('--seed', type=int, default=defaults.seed, help='RNG seed for tile spawns')
    parser.add_argument('--log-level', default=defaults.log_level, help='Logging level')
    return parser

MOVE_PROMPT = "Enter move (W/A/S/D for Up/Left/Down/Right, 3-6 to change size, N for new game, Q to quit): "
PLAY_AGAIN_PROMPT = "Play again? (Y/N): "

def read_command(input_fn: Callable[[str], str], prompt: str) -> str:
    try:
        return input_fn(prompt).strip().upper()
    except EOFError:
        return 'Q'

def main(argv: Optional[List[str]] = None,
         input_fn: Callable[[str], str] = input,
         print_fn: Callable[..., None] = print) -> int:
    defaults = GameSettings.from_env()
    parser = build_parser(defaults)
    args = parser.parse_args(argv)
    try:
        settings = GameSettings(
            board_size=args.size,
            seed=args.seed,
            rate_limit=defaults.rate_limit,
            log_level=args.log_level,
        )
    except ValidationError as e:
        parser.error(str(e))
    configure_logging(settings.log_level)

    session = GameSession(settings.board_size, settings.make_rng())
    display_board_state(session, print_fn)

    while True:
        quit_requested = False
        while session.status == 'playing':
            command = read_command(input_fn, MOVE_PROMPT)

            if command == 'Q':
                quit_requested = True
                break
            if command == 'N':
                session.reset()
                display_board_state(session, print_fn)
                continue
            if command.isdigit():
                try:
                    session.change_size(int(command))
                except InvalidBoardSizeError as e:
                    print_fn(str(e))
                    continue
                display_board_state(session, print_fn)
                continue

            chosen_direction = parse_move(command)
            if chosen_direction is None:
                print_fn("Invalid input. Use W, A, S, D.")
                continue

            if not session.make_move(chosen_direction):
                print_fn("Move did not change the board. Try a different direction.")
            display_board_state(session, print_fn)

        if quit_requested:
            print_fn("Quitting game.")
            break

        if session.status == 'won':
            print_fn("Congratulations! You reached the 2048 tile!")
        else:
            print_fn("No more moves possible. Better luck next time!")
        if read_command(input_fn, PLAY_AGAIN_PROMPT) not in ('Y', 'YES'):
            break
        session.reset()
        display_board_state(session, print_fn)

    logger.debug("Session finished after %d moves, best score %d", session.moves, session.best_score)
    return 0


# --- Display Functions ---

def format_board(board: Board) -> str:
    width = max(len(str(cell)) for row in board for cell in row)
    lines = [" ".join(str(cell or '.').rjust(width) for cell in row) for row in board]
    return "\n".join(lines)

def display_board_state(session: GameSession, print_fn: Callable[..., None] = print) -> None:
    """Prints the board, score, best score and game status to the console."""
    print_fn(f"\nScore: {session.score}  Best: {session.best_score}")
    status_message = {
        'playing': "Status: PLAYING",
        'won': "YOU WON!",
        'gameOver': "GAME OVER!",
    }
    print_fn(status_message[session.status])
    print_fn(format_board(session.board))
    print_fn("-" * (session.size * 6))

if __name__ == "__main__":
    raise SystemExit(main())
