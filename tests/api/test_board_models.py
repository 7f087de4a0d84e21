"""Unit tests for chessboard/api/models.py"""

from uuid import UUID, uuid4

import pytest
from pydantic import ValidationError

from chessboard.api.models import (
    ArrowRequest,
    CreateBoardRequest,
    PremoveRequest,
    PromotionDialogRequest,
    PromotionRequest,
    ResizeRequest,
)
from chessboard.core.shared_types import Orientation, PromotionDialogVariant


@pytest.fixture
def mock_id() -> UUID:
    return uuid4()


# -- Validation - CreateBoardRequest --
def test_create_board_defaults() -> None:
    request = CreateBoardRequest()
    assert (request.rows, request.columns) == (8, 8)
    assert request.orientation == Orientation.WHITE
    assert request.position == {}
    assert request.premoves_allowed


def test_create_board_with_position() -> None:
    request = CreateBoardRequest(
        rows=10,
        columns=10,
        orientation="black",
        board_width=500,
        position={"a10": "bR", "j1": "wR"},
    )
    assert request.orientation == Orientation.BLACK
    assert request.position == {"a10": "bR", "j1": "wR"}


@pytest.mark.parametrize(
    "fields",
    [
        {"rows": 0},
        {"columns": -3},
        {"board_width": 0},
        {"position": {"e9x": "wK"}},
        {"position": {"e1": "xK"}},
        {"position": {"a01": "wK"}},
        {"position": {"a0": "wK"}},
        {"orientation": "sideways"},
    ],
)
def test_invalid_create_board(fields: dict) -> None:
    # InvalidRequestError raised in a validator is a ValueError: pydantic reports it as a ValidationError
    with pytest.raises(ValidationError):
        _ = CreateBoardRequest(**fields)


# -- Validation - PremoveRequest --
def test_valid_premove(mock_id: UUID) -> None:
    request = PremoveRequest(board_id=mock_id, source_square="e2", target_square="e4", piece="wP")
    assert request.source_square == "e2"
    assert request.target_square == "e4"
    assert request.piece == "wP"


@pytest.mark.parametrize(
    "square",
    [
        "nonsense",  # letters after the rank
        "11",  # First character is not a letter
        "aa",  # no rank number
        "E2",  # capital file letter
        "a0",  # no rank 0
        "a01",  # leading zero
        "a\u00b2",  # non-ASCII digit
        "e4\n",  # trailing newline
    ],
)
def test_invalid_premove_square(mock_id: UUID, square: str) -> None:
    with pytest.raises(ValidationError):
        _ = PremoveRequest(board_id=mock_id, source_square=square, target_square="e4", piece="wP")
    with pytest.raises(ValidationError):
        _ = PremoveRequest(board_id=mock_id, source_square="e2", target_square=square, piece="wP")


@pytest.mark.parametrize("piece", ["P", "wp", "wPawn", "bX"])
def test_invalid_premove_piece(mock_id: UUID, piece: str) -> None:
    with pytest.raises(ValidationError):
        _ = PremoveRequest(board_id=mock_id, source_square="e2", target_square="e4", piece=piece)


# -- Validation - ArrowRequest / ResizeRequest --
def test_arrow_squares_are_optional(mock_id: UUID) -> None:
    request = ArrowRequest(board_id=mock_id)
    assert request.from_square is None and request.to_square is None


def test_invalid_arrow_square(mock_id: UUID) -> None:
    with pytest.raises(ValidationError):
        _ = ArrowRequest(board_id=mock_id, from_square="z", to_square="e4")


def test_invalid_resize(mock_id: UUID) -> None:
    with pytest.raises(ValidationError):
        _ = ResizeRequest(board_id=mock_id, board_width=-10)


# -- Validation - promotion --
def test_promotion_defaults_on_create() -> None:
    request = CreateBoardRequest()
    assert request.auto_promote_to_queen is False
    assert request.promotion_dialog_variant == PromotionDialogVariant.DEFAULT


@pytest.mark.parametrize("square", ["e0", "e08", "e²"])
def test_invalid_promotion_square(mock_id: UUID, square: str) -> None:
    with pytest.raises(ValidationError):
        _ = PromotionRequest(board_id=mock_id, source_square="e7", target_square=square, piece="wP")


def test_promotion_dialog_variant_by_value(mock_id: UUID) -> None:
    request = PromotionDialogRequest(board_id=mock_id, variant="modal")
    assert request.variant == PromotionDialogVariant.MODAL
    with pytest.raises(ValidationError):
        _ = PromotionDialogRequest(board_id=mock_id, variant="sideways")
