"""
Type definitions used across layers
"""

from enum import StrEnum


class Orientation(StrEnum):
    """Which side of the board is drawn at the bottom."""

    WHITE = "white"
    BLACK = "black"


class SquareColor(StrEnum):
    LIGHT = "light"
    DARK = "dark"


class PieceColor(StrEnum):
    WHITE = "w"
    BLACK = "b"


class PieceKind(StrEnum):
    KING = "K"
    QUEEN = "Q"
    ROOK = "R"
    BISHOP = "B"
    KNIGHT = "N"
    PAWN = "P"


class PromotionDialogVariant(StrEnum):
    DEFAULT = "default"
    VERTICAL = "vertical"
    MODAL = "modal"
