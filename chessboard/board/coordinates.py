"""
Geometry of the board: square <-> grid index <-> pixel coordinates.

Grid indices are visual: row 0 is the top row on screen, column 0 the leftmost column, whatever the orientation.
The orientation only enters the square <-> grid formulas. Pixel coordinates are then a plain scaling of the grid.

    white orientation (8x8)          black orientation (8x8)
    row 0: a8 ... h8                 row 0: h1 ... a1
    row 7: a1 ... h1                 row 7: h8 ... a8
"""

from dataclasses import dataclass
from typing import Optional

from chessboard.board.square import BoardDimensions, Square, require_on_board
from chessboard.core.exceptions import InvalidBoardWidthError, InvalidSquareError
from chessboard.core.shared_types import Orientation

GridIndex = tuple[int, int]


@dataclass(frozen=True)
class Coords:
    """Pixel position relative to the top-left corner of the board"""

    x: float
    y: float


@dataclass(frozen=True)
class SquareSize:
    width: float
    height: float


def _require_positive_width(board_width: float) -> None:
    if board_width <= 0:
        raise InvalidBoardWidthError(f"Board width must be positive, got {board_width}.")


def board_height(dims: BoardDimensions, board_width: float) -> float:
    """Non-square boards keep square cells: the height follows from the width."""
    _require_positive_width(board_width)
    return board_width * dims.rows / dims.columns


def square_size(dims: BoardDimensions, board_width: float) -> SquareSize:
    return SquareSize(
        width=board_width / dims.columns,
        height=board_height(dims, board_width) / dims.rows,
    )


def square_to_grid(
    square: Square, dims: BoardDimensions, orientation: Orientation
) -> GridIndex:
    """(row, col) on screen of a given square"""
    require_on_board(square, dims)
    if orientation == Orientation.WHITE:
        return dims.rows - square.rank, square.file - 1
    return square.rank - 1, dims.columns - square.file


def grid_to_square(
    row: int, col: int, dims: BoardDimensions, orientation: Orientation
) -> Square:
    """Reverse of `square_to_grid()`"""
    if not (0 <= row < dims.rows and 0 <= col < dims.columns):
        raise InvalidSquareError(
            f"Grid index ({row}, {col}) is not on a {dims.rows}x{dims.columns} board."
        )
    if orientation == Orientation.WHITE:
        return Square(file=col + 1, rank=dims.rows - row)
    return Square(file=dims.columns - col, rank=row + 1)


def square_to_pixel(
    square: Square,
    dims: BoardDimensions,
    orientation: Orientation,
    board_width: float,
) -> Coords:
    """Top-left corner of the square"""
    size = square_size(dims, board_width)
    row, col = square_to_grid(square, dims, orientation)
    return Coords(x=col * size.width, y=row * size.height)


def square_center(
    square: Square,
    dims: BoardDimensions,
    orientation: Orientation,
    board_width: float,
) -> Coords:
    """Arrows and dialogs attach to the middle of a square rather than its corner"""
    size = square_size(dims, board_width)
    corner = square_to_pixel(square, dims, orientation, board_width)
    return Coords(x=corner.x + size.width / 2, y=corner.y + size.height / 2)


def pixel_to_square(
    x: float,
    y: float,
    dims: BoardDimensions,
    orientation: Orientation,
    board_width: float,
) -> Optional[Square]:
    """Hit test: which square is under the given point? None if the point lies outside the board."""
    size = square_size(dims, board_width)
    col = int(x // size.width)
    row = int(y // size.height)
    if not (0 <= row < dims.rows and 0 <= col < dims.columns):
        return None
    return grid_to_square(row, col, dims, orientation)
