"""Where the promotion prompt goes, and which pieces it offers."""

from dataclasses import dataclass
from typing import Optional

from chessboard.board.coordinates import Coords, square_center, square_size
from chessboard.board.pieces import Piece
from chessboard.board.square import BoardDimensions, Square
from chessboard.core.shared_types import (
    Orientation,
    PieceColor,
    PieceKind,
    PromotionDialogVariant,
)

PROMOTION_KINDS: tuple[PieceKind, ...] = (
    PieceKind.QUEEN,
    PieceKind.ROOK,
    PieceKind.KNIGHT,
    PieceKind.BISHOP,
)


@dataclass(frozen=True)
class PromotionDialogLayout:
    anchor: Coords  # center of the promotion square
    offset: Coords  # translation applied on top of the anchor, depends on the dialog variant
    options: list[Piece]


def promotion_options(target: Optional[Square]) -> list[Piece]:
    """Black pawns promote on the first rank, white pawns anywhere else (the last rank)."""
    color = (
        PieceColor.BLACK
        if target is not None and target.rank == 1
        else PieceColor.WHITE
    )
    return [Piece(color, kind) for kind in PROMOTION_KINDS]


def promotion_dialog_layout(
    target: Optional[Square],
    dims: BoardDimensions,
    orientation: Orientation,
    board_width: float,
    variant: PromotionDialogVariant = PromotionDialogVariant.DEFAULT,
) -> PromotionDialogLayout:
    """Without a promotion square, the dialog falls back to the top-left square (from white's point of view)."""
    anchor_square = target if target is not None else Square(1, dims.rows)
    anchor = square_center(anchor_square, dims, orientation, board_width)
    square_width = square_size(dims, board_width).width

    offsets: dict[PromotionDialogVariant, Coords] = {
        PromotionDialogVariant.DEFAULT: Coords(-square_width, -square_width),
        PromotionDialogVariant.VERTICAL: Coords(-board_width / 16, -board_width / 16),
        PromotionDialogVariant.MODAL: Coords(0, 3 * board_width / dims.columns),
    }
    return PromotionDialogLayout(
        anchor=anchor, offset=offsets[variant], options=promotion_options(target)
    )
