"""
Color of each square and the notation (file letters / rank numbers) drawn along the edges of the board.

Both work on visual grid indices (see coordinates.py): row 0 is the top row on screen.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from chessboard.board.coordinates import grid_to_square
from chessboard.board.square import BoardDimensions, file_letters
from chessboard.core.shared_types import Orientation, SquareColor

StyleOverrides = dict[str, Any]

# Relative to the width of a square
LABEL_FONT_RATIO = 1 / 6.2
LABEL_INSET_RATIO = 1 / 48


class LabelPlacement(Enum):
    """Rank numbers sit in the top-left corner of a square, file letters in the bottom-right corner."""

    RANK = "rank"
    FILE = "file"


@dataclass(frozen=True)
class NotationLabel:
    rank_label: Optional[str]
    file_label: Optional[str]
    tone: SquareColor  # text is drawn in the color of the *other* kind of square, so it stands out


def square_color(
    row: int, col: int, dims: BoardDimensions, orientation: Orientation
) -> SquareColor:
    """
    Checkerboard parity, anchored so that a1 is dark.
    ---

    a1 is the bottom-left square for white (row = rows - 1, col = 0), and the top-right square for black (row = 0, col = columns - 1).
    So whether an even (row + col) means 'dark' depends on the parity of the number of rows (white) or columns (black).
    """
    odd_edge = (
        dims.rows % 2 != 0 if orientation == Orientation.WHITE else dims.columns % 2 != 0
    )
    is_dark = ((row + col) % 2 == 0) == odd_edge
    return SquareColor.DARK if is_dark else SquareColor.LIGHT


def contrasting(color: SquareColor) -> SquareColor:
    return SquareColor.LIGHT if color == SquareColor.DARK else SquareColor.DARK


def notation_label(
    row: int, col: int, dims: BoardDimensions, orientation: Orientation
) -> Optional[NotationLabel]:
    """
    Rank numbers go on the leftmost column, file letters on the bottom row. The bottom-left square gets both.
    Every other square gets no label at all (None).
    """
    on_left_edge = col == 0
    on_bottom_edge = row == dims.rows - 1
    if not (on_left_edge or on_bottom_edge):
        return None

    # grid_to_square takes care of the mirroring for black
    square = grid_to_square(row, col, dims, orientation)
    letters = file_letters(dims.columns)
    return NotationLabel(
        rank_label=str(square.rank) if on_left_edge else None,
        file_label=letters[square.file - 1] if on_bottom_edge else None,
        tone=contrasting(square_color(row, col, dims, orientation)),
    )


def label_style(
    placement: LabelPlacement,
    square_width: float,
    custom_style: Optional[StyleOverrides] = None,
) -> StyleOverrides:
    """
    Position and font size of a label inside its square.

    The custom style is an opaque bag of overrides: it is merged last, its keys are not interpreted.
    """
    inset = square_width * LABEL_INSET_RATIO
    if placement == LabelPlacement.RANK:
        style: StyleOverrides = {"top": 0, "left": inset}
    else:
        style = {"right": inset, "bottom": 0}
    style["fontSize"] = square_width * LABEL_FONT_RATIO
    return {**style, **(custom_style or {})}
