# core.py
# Stateless board engine for the sliding-tile game: every function takes a
# board and returns a new one, the input board is never modified.

from enum import Enum
from typing import Tuple, List, Optional, Union
import random

Board = List[List[int]]
Row = List[int]
Cell = Tuple[int, int]
MoveResult = Tuple[Board, int, bool]

WIN_TILE = 2048
NEW_TILE_FOUR_PROBABILITY = 0.1
ALLOWED_SIZES = (3, 4, 5, 6)
DEFAULT_SIZE = 4
INITIAL_TILES = 2

class GameProgressState(Enum):
    """Represents the current progress state of the game."""
    IN_PROGRESS = 1
    GAME_OVER = 2  # Lost
    GAME_WON = 3

class Direction(str, Enum):
    """Represents the possible move directions."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

# --- Board Helper Functions ---

def create_empty_board(size: int) -> Board:
    """
    Creates an N x N board with every cell empty.
    Args:
        size (int): The dimension of the board.
    Returns:
        Board: A new zero-filled board.
    Raises:
        ValueError: If size is not a positive integer.
    """
    if not isinstance(size, int) or isinstance(size, bool) or size <= 0:
        raise ValueError("Board size must be a positive integer.")
    return [[0] * size for _ in range(size)]

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

def copy_board(board: Board) -> Board:
    return [list(row) for row in board]

def get_empty_cells(board: Board) -> List[Cell]:
    """
    Get coordinates of empty (0-value) cells in row-major order.
    Args:
        board (Board): The board to check.
    Returns:
        List[Cell]: List of (row, col) tuples for empty cells.
    """
    n = get_board_size(board)
    empty_cells = []
    for row in range(n):
        for col in range(n):
            if board[row][col] == 0:
                empty_cells.append((row, col))
    return empty_cells

def add_random_tile(board: Board, rng: Optional[random.Random] = None) -> Board:
    """
    Adds a new tile (90% chance of 2, 10% chance of 4) to an empty cell on a copy of the board.
    Args:
        board (Board): The current game board.
        rng (random.Random, optional): Source of randomness. Defaults to the
                                       module-level generator.
    Returns:
        Board: A new board with the added tile. If there are no empty cells
               the copy is identical to the input.
    """
    rng = rng if rng is not None else random
    empty_cells = get_empty_cells(board)
    new_board = copy_board(board) # Work on a copy
    if not empty_cells:
        return new_board

    row, col = rng.choice(empty_cells)
    new_board[row][col] = 4 if rng.random() < NEW_TILE_FOUR_PROBABILITY else 2
    return new_board

def initialize_board(size: int = DEFAULT_SIZE, rng: Optional[random.Random] = None) -> Board:
    """
    Initializes a new game board with two random tiles.
    Args:
        size (int): The dimension of the N x N game board. Default is 4.
        rng (random.Random, optional): Source of randomness for the spawns.
    Returns:
        Board: The initial board.
    Raises:
        ValueError: If board size is not a positive integer.
    """
    current_board = create_empty_board(size)
    for _ in range(INITIAL_TILES):
        current_board = add_random_tile(current_board, rng)
    return current_board

# --- Line Manipulation (Core Move Logic) ---

def slide_row_left(row: Row) -> Tuple[Row, int]:
    """
    Slides a single line towards index 0 and merges equal neighbours.

    A tile produced by a merge is never merged again in the same pass, so
    [2, 2, 2, 2] becomes [4, 4, 0, 0] and not [8, 0, 0, 0].
    Args:
        row (Row): The line to process.
    Returns:
        Tuple[Row, int]: The processed line and the score gained from merges.
    """
    tiles = [value for value in row if value != 0]
    merged: Row = []
    score = 0
    i = 0

    while i < len(tiles):
        if i + 1 < len(tiles) and tiles[i] == tiles[i + 1]:
            merged_value = tiles[i] * 2
            merged.append(merged_value)
            score += merged_value
            i += 2 # Skip the tile that was merged in
        else:
            merged.append(tiles[i])
            i += 1

    merged += [0] * (len(row) - len(merged))
    return merged, score

# --- Board Transformations ---

def transpose_board(board: Board) -> Board:
    """
    Transposes a given board (swaps rows and columns).
    Args:
        board (Board): The board to transpose.
    Returns:
        Board: A new transposed board.
    """
    n = get_board_size(board)
    new_board = create_empty_board(n)
    for r in range(n):
        for c in range(n):
            new_board[c][r] = board[r][c]
    return new_board

def reverse_rows(board: Board) -> Board:
    """
    Reverses each row in a given board.
    Args:
        board (Board): The board whose rows are to be reversed.
    Returns:
        Board: A new board with rows reversed.
    """
    return [row[::-1] for row in board]

# --- Core Game Move Processing ---

def slide_left(board: Board) -> MoveResult:
    """
    Slides every row of the board to the left.
    Args:
        board (Board): The board to process.
    Returns:
        MoveResult: The processed board, total score increase,
                    and a flag if any row changed.
    """
    get_board_size(board)
    new_board: Board = []
    total_score = 0
    moved = False

    for line in board:
        new_line, line_score = slide_row_left(line)
        new_board.append(new_line)
        total_score += line_score
        if new_line != list(line):
            moved = True

    return new_board, total_score, moved

def slide_right(board: Board) -> MoveResult:
    slid_board, score, moved = slide_left(reverse_rows(board))
    return reverse_rows(slid_board), score, moved

def slide_up(board: Board) -> MoveResult:
    slid_board, score, moved = slide_left(transpose_board(board))
    return transpose_board(slid_board), score, moved

def slide_down(board: Board) -> MoveResult:
    slid_board, score, moved = slide_right(transpose_board(board))
    return transpose_board(slid_board), score, moved

_SLIDES = {
    Direction.LEFT: slide_left,
    Direction.RIGHT: slide_right,
    Direction.UP: slide_up,
    Direction.DOWN: slide_down,
}

def process_move(board: Board, direction: Union[Direction, str]) -> MoveResult:
    """
    Processes a move in the specified direction on a copy of the board.
    Args:
        board (Board): The current game board.
        direction (Direction | str): The direction to move, either the enum
                                     member or its value ("left", "up", ...).
    Returns:
        MoveResult:
            - The new board state after the move.
            - The score gained from this move.
            - A boolean indicating if the board changed as a result of the move.
    Raises:
        ValueError: If an invalid direction is specified.
    """
    try:
        direction = Direction(direction)
    except ValueError:
        raise ValueError(f"Invalid direction specified for process_move: {direction!r}") from None
    return _SLIDES[direction](board)

# --- Game State Checks ---

def can_move(board: Board) -> bool:
    """
    Checks if any move is possible: an empty cell or two equal neighbours.
    Args:
        board (Board): The game board.
    Returns:
        bool: True if any move can be made, False otherwise.
    """
    if get_empty_cells(board):
        return True

    n = len(board)
    for r in range(n):
        for c in range(n - 1):
            if board[r][c] == board[r][c + 1]:
                return True
    for r in range(n - 1):
        for c in range(n):
            if board[r][c] == board[r + 1][c]:
                return True
    return False

def is_game_over(board: Board) -> bool:
    return not can_move(board)

def has_won(board: Board) -> bool:
    """
    Check if the game is won: some tile equals exactly 2048.
    Args:
        board (Board): The game board.
    Returns:
        bool: True if the game is won, False otherwise.
    """
    return any(cell == WIN_TILE for row in board for cell in row)

def determine_game_status(board: Board) -> GameProgressState:
    """
    Determines the current progress state of the game based on the board.
    Args:
        board (Board): The current game board.
    Returns:
        GameProgressState: The current state (IN_PROGRESS, GAME_WON, GAME_OVER).
    """
    if has_won(board):
        return GameProgressState.GAME_WON
    if is_game_over(board):
        return GameProgressState.GAME_OVER
    return GameProgressState.IN_PROGRESS

# --- Board Statistics ---

def get_max_tile(board: Board) -> int:
    return max((cell for row in board for cell in row), default=0)

def get_tile_count(board: Board) -> int:
    return sum(1 for row in board for cell in row if cell > 0)
