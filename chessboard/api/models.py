"""Requests and Response models"""

import re
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from chessboard.board.square import SQUARE_NAME_PATTERN
from chessboard.core.exceptions import InvalidRequestError
from chessboard.core.shared_types import (
    Orientation,
    PromotionDialogVariant,
    SquareColor,
)

SquareName = str
PieceTag = str

PIECE_PATTERN = re.compile(r"[wb][KQRBNP]")


def _validate_square_name(value: str) -> str:
    if not SQUARE_NAME_PATTERN.fullmatch(value):
        raise InvalidRequestError(f"Cannot interpret {value!r} as a valid square name.")
    return value


def _validate_piece_tag(value: str) -> str:
    if not PIECE_PATTERN.fullmatch(value):
        raise InvalidRequestError(f"Cannot interpret {value!r} as a piece.")
    return value


# --- REQUEST MODELS ---
class CreateBoardRequest(BaseModel):
    rows: int = 8
    columns: int = 8
    orientation: Orientation = Orientation.WHITE
    board_width: float = 560.0
    position: dict[SquareName, PieceTag] = {}
    premoves_allowed: bool = True
    auto_promote_to_queen: bool = False
    promotion_dialog_variant: PromotionDialogVariant = PromotionDialogVariant.DEFAULT

    @field_validator(*["rows", "columns"])
    @classmethod
    def validate_dimension(cls, value: int) -> int:
        if value < 1:
            raise InvalidRequestError(
                f"Board needs at least one row and one column, got {value}."
            )
        return value

    @field_validator("board_width")
    @classmethod
    def validate_board_width(cls, value: float) -> float:
        if value <= 0:
            raise InvalidRequestError(f"Board width must be positive, got {value}.")
        return value

    @field_validator("position")
    @classmethod
    def validate_position(cls, value: dict[str, str]) -> dict[str, str]:
        for square_name, tag in value.items():
            _validate_square_name(square_name)
            _validate_piece_tag(tag)
        return value


class GetBoardRequest(BaseModel):
    board_id: UUID


class DeleteBoardRequest(BaseModel):
    board_id: UUID


class PremoveRequest(BaseModel):
    board_id: UUID
    source_square: SquareName
    target_square: SquareName
    piece: PieceTag

    @field_validator(*["source_square", "target_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square_name(value)

    @field_validator("piece")
    @classmethod
    def validate_piece(cls, value: str) -> str:
        return _validate_piece_tag(value)


class PromotionRequest(BaseModel):
    """A pawn (piece) moved from source_square onto a promotion square."""

    board_id: UUID
    source_square: SquareName
    target_square: SquareName
    piece: PieceTag

    @field_validator(*["source_square", "target_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square_name(value)

    @field_validator("piece")
    @classmethod
    def validate_piece(cls, value: str) -> str:
        return _validate_piece_tag(value)


class PromotionDialogRequest(BaseModel):
    board_id: UUID
    variant: PromotionDialogVariant


class ArrowRequest(BaseModel):
    """
    Used for both committing an arrow and updating the arrow currently being drawn.
    For the latter, leaving out both squares means the drawing stopped.
    """

    board_id: UUID
    from_square: Optional[SquareName] = None
    to_square: Optional[SquareName] = None
    color: Optional[str] = None

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return _validate_square_name(value)


class ClearRequest(BaseModel):
    board_id: UUID


class OrientationRequest(BaseModel):
    board_id: UUID
    orientation: Orientation


class ResizeRequest(BaseModel):
    board_id: UUID
    board_width: float

    @field_validator("board_width")
    @classmethod
    def validate_board_width(cls, value: float) -> float:
        if value <= 0:
            raise InvalidRequestError(f"Board width must be positive, got {value}.")
        return value


# --- RESPONSE MODELS ---
class NotationResponse(BaseModel):
    rank_label: Optional[str]
    file_label: Optional[str]
    tone: SquareColor
    rank_style: Optional[dict[str, Any]] = None
    file_style: Optional[dict[str, Any]] = None


class SquareResponse(BaseModel):
    square: SquareName
    row: int
    col: int
    x: float
    y: float
    width: float
    height: float
    color: SquareColor
    notation: Optional[NotationResponse]
    piece: Optional[PieceTag]
    is_premoved_piece: bool
    has_premove: bool


class ArrowResponse(BaseModel):
    key: str
    marker_id: str
    from_square: SquareName
    to_square: SquareName
    x1: float
    y1: float
    x2: float
    y2: float
    shorten_by: float
    stroke_width: float
    opacity: float
    color: str


class PremoveStepResponse(BaseModel):
    source_square: SquareName
    target_square: SquareName
    index: int


class PremoveChainResponse(BaseModel):
    piece: PieceTag
    route: list[PremoveStepResponse]


class PromotionResponse(BaseModel):
    from_square: SquareName
    to_square: SquareName
    variant: PromotionDialogVariant
    anchor_x: float
    anchor_y: float
    offset_x: float
    offset_y: float
    options: list[PieceTag]


class BoardViewResponse(BaseModel):
    board_id: UUID
    orientation: Orientation
    rows: int
    columns: int
    width: float
    height: float
    squares: list[SquareResponse]
    arrows: list[ArrowResponse]
    premove_chains: list[PremoveChainResponse]
    promotion: Optional[PromotionResponse] = None


class PromotionOutcomeResponse(BaseModel):
    """promoted_to is only set when the board promoted on its own (auto-promotion to queen)."""

    board: BoardViewResponse
    promoted_to: Optional[PieceTag] = None
