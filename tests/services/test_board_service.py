"""Unit tests for chessboard/services/board_service.py"""

from typing import Generator
from uuid import UUID, uuid4

import pytest

from chessboard.core.exceptions import BoardError, PremoveCycleError, RepositoryError
from chessboard.core.models import BoardModel
from chessboard.core.shared_types import (
    Orientation,
    PromotionDialogVariant,
    SquareColor,
)
from chessboard.services.board_service import (
    ArrowRequest,
    BoardService,
    BoardViewResponse,
    ClearRequest,
    CreateBoardRequest,
    DeleteBoardRequest,
    GetBoardRequest,
    OrientationRequest,
    PremoveRequest,
    PromotionDialogRequest,
    PromotionOutcomeResponse,
    PromotionRequest,
    ResizeRequest,
)


# --- MOCK DEPENDENCIES ----
class MockRepository:
    """Mock the BoardRepository using a dictionary of board models."""

    def __init__(self) -> None:
        self._boards: dict[UUID, BoardModel] = {}

    def create_board(self, board: BoardModel) -> tuple[BoardModel, UUID]:
        board_id = uuid4()
        self._boards[board_id] = board
        return board, board_id

    def get_board(self, board_id: UUID) -> BoardModel | None:
        return self._boards.get(board_id)

    def update_board(self, board_id: UUID, board: BoardModel) -> BoardModel | None:
        if board_id not in self._boards:
            return None
        self._boards[board_id] = board
        return board

    def delete_board(self, board_id: UUID) -> BoardModel | None:
        return self._boards.pop(board_id, None)

    def clear(self) -> None:
        """Clear the repository (useful in between tests)"""
        self._boards.clear()


@pytest.fixture
def mock_repository() -> Generator[MockRepository, None, None]:
    """Ensures to clear the repository between tests"""
    repo = MockRepository()
    try:
        yield repo
    finally:
        repo.clear()


@pytest.fixture
def service(mock_repository: MockRepository) -> BoardService:
    return BoardService(mock_repository)


@pytest.fixture
def board_id(service: BoardService) -> UUID:
    """Standard board, 400px wide, with kings and a pawn each"""
    response = service.create_board(
        CreateBoardRequest(
            board_width=400,
            position={"e1": "wK", "e8": "bK", "e2": "wP", "d7": "bP"},
        )
    )
    return response.board_id


def square(response: BoardViewResponse, name: str):
    return next(s for s in response.squares if s.square == name)


# --- SERVICE - CREATE / GET ----
def test_create_board(service: BoardService, mock_repository: MockRepository) -> None:
    response = service.create_board(CreateBoardRequest(rows=6, columns=5, board_width=500))
    assert isinstance(response, BoardViewResponse)
    assert isinstance(response.board_id, UUID)
    assert (response.rows, response.columns) == (6, 5)
    assert response.width == 500
    assert response.height == 600
    assert len(response.squares) == 30

    stored = mock_repository.get_board(response.board_id)
    assert stored is not None
    assert stored.premoves == []
    assert stored.orientation == "white"


def test_get_board_view(service: BoardService, board_id: UUID) -> None:
    response = service.get_board_view(GetBoardRequest(board_id=board_id))
    a1 = square(response, "a1")
    assert a1.color == SquareColor.DARK
    assert (a1.x, a1.y, a1.width, a1.height) == (0, 350, 50, 50)
    assert a1.notation is not None
    assert a1.notation.rank_label == "1"
    assert a1.notation.file_label == "a"
    assert a1.notation.rank_style is not None and a1.notation.file_style is not None

    e1 = square(response, "e1")
    assert e1.piece == "wK"
    assert not e1.is_premoved_piece
    assert square(response, "e4").piece is None


def test_unknown_board(service: BoardService) -> None:
    with pytest.raises(RepositoryError):
        service.get_board_view(GetBoardRequest(board_id=uuid4()))


def test_notation_style_is_passed_through(mock_repository: MockRepository) -> None:
    service = BoardService(mock_repository, notation_style={"fontWeight": "bold"})
    response = service.create_board(CreateBoardRequest())
    notation = square(response, "a1").notation
    assert notation.rank_style["fontWeight"] == "bold"
    assert notation.file_style["fontWeight"] == "bold"


# --- SERVICE - PREMOVES ----
def test_premove_chain(service: BoardService, board_id: UUID, mock_repository: MockRepository) -> None:
    service.add_premove(PremoveRequest(board_id=board_id, source_square="e2", target_square="e4", piece="wP"))
    service.add_premove(PremoveRequest(board_id=board_id, source_square="e4", target_square="e5", piece="wP"))
    response = service.add_premove(
        PremoveRequest(board_id=board_id, source_square="d7", target_square="e5", piece="bP")
    )

    assert [len(chain.route) for chain in response.premove_chains] == [2, 1]
    assert response.premove_chains[1].route[0].index == 2

    e5 = square(response, "e5")
    assert e5.piece == "bP"
    assert e5.is_premoved_piece
    assert square(response, "e2").piece is None
    assert square(response, "e2").has_premove

    stored = mock_repository.get_board(board_id)
    assert stored.premoves == [["e2", "e4", "wP"], ["e4", "e5", "wP"], ["d7", "e5", "bP"]]


def test_premove_cycle_propagates(service: BoardService, board_id: UUID, mock_repository: MockRepository) -> None:
    service.add_premove(PremoveRequest(board_id=board_id, source_square="e1", target_square="f1", piece="wK"))
    with pytest.raises(PremoveCycleError):
        service.add_premove(PremoveRequest(board_id=board_id, source_square="f1", target_square="e1", piece="wK"))
    assert len(mock_repository.get_board(board_id).premoves) == 1


def test_premove_off_the_board(service: BoardService, board_id: UUID) -> None:
    """Any top-level custom exception is raised (specific types are the responsibility of the domain layer)"""
    with pytest.raises(BoardError):
        service.add_premove(PremoveRequest(board_id=board_id, source_square="e2", target_square="e9", piece="wP"))


def test_clear_premoves(service: BoardService, board_id: UUID) -> None:
    service.add_premove(PremoveRequest(board_id=board_id, source_square="e2", target_square="e4", piece="wP"))
    response = service.clear_premoves(ClearRequest(board_id=board_id))
    assert response.premove_chains == []
    assert square(response, "e2").piece == "wP"


# --- SERVICE - ARROWS ----
def test_arrows(service: BoardService, board_id: UUID) -> None:
    service.add_arrow(ArrowRequest(board_id=board_id, from_square="e2", to_square="e4"))
    service.add_arrow(ArrowRequest(board_id=board_id, from_square="d2", to_square="e4", color="red"))
    response = service.draw_arrow(ArrowRequest(board_id=board_id, from_square="g1", to_square="e4"))

    assert [a.key for a in response.arrows] == ["e2-e4", "d2-e4", "g1-e4-active"]
    assert [a.marker_id for a in response.arrows] == ["arrowhead-0", "arrowhead-1", "arrowhead-2"]
    first = response.arrows[0]
    assert (first.x1, first.y1) == (225, 325)
    assert first.shorten_by == pytest.approx(50 / 3.5)
    assert response.arrows[1].color == "red"
    assert response.arrows[2].shorten_by == pytest.approx(10)

    # stop drawing
    response = service.draw_arrow(ArrowRequest(board_id=board_id))
    assert [a.key for a in response.arrows] == ["e2-e4", "d2-e4"]

    response = service.clear_arrows(ClearRequest(board_id=board_id))
    assert response.arrows == []


def test_degenerate_arrow_is_stored_but_not_drawn(service: BoardService, board_id: UUID, mock_repository: MockRepository) -> None:
    response = service.add_arrow(ArrowRequest(board_id=board_id, from_square="c3", to_square="c3"))
    assert response.arrows == []
    assert mock_repository.get_board(board_id).arrows == [["c3", "c3", None]]


def test_arrow_needs_both_squares(service: BoardService, board_id: UUID) -> None:
    with pytest.raises(BoardError):
        service.add_arrow(ArrowRequest(board_id=board_id, from_square="e2"))


# --- SERVICE - ORIENTATION / SIZE ----
def test_set_orientation(service: BoardService, board_id: UUID) -> None:
    response = service.set_orientation(OrientationRequest(board_id=board_id, orientation=Orientation.BLACK))
    assert response.orientation == Orientation.BLACK
    assert response.squares[0].square == "h1"
    a1 = square(response, "a1")
    assert (a1.x, a1.y) == (350, 0)
    assert a1.color == SquareColor.DARK

    response = service.flip_board(GetBoardRequest(board_id=board_id))
    assert response.orientation == Orientation.WHITE


def test_resize_board(service: BoardService, board_id: UUID) -> None:
    response = service.resize_board(ResizeRequest(board_id=board_id, board_width=800))
    assert response.width == 800
    assert square(response, "a1").y == 700


# --- SERVICE - PROMOTION ----
def test_promotion_dialog(service: BoardService, board_id: UUID, mock_repository: MockRepository) -> None:
    assert service.get_board_view(GetBoardRequest(board_id=board_id)).promotion is None

    outcome = service.request_promotion(
        PromotionRequest(board_id=board_id, source_square="e7", target_square="e8", piece="wP")
    )
    assert isinstance(outcome, PromotionOutcomeResponse)
    assert outcome.promoted_to is None

    promotion = outcome.board.promotion
    assert promotion is not None
    assert (promotion.from_square, promotion.to_square) == ("e7", "e8")
    assert (promotion.anchor_x, promotion.anchor_y) == (225, 25)
    assert (promotion.offset_x, promotion.offset_y) == (-50, -50)
    assert promotion.options == ["wQ", "wR", "wN", "wB"]
    assert mock_repository.get_board(board_id).promote_to == "e8"

    # the dialog stays up across requests until the promotion is finished
    response = service.set_promotion_dialog_variant(
        PromotionDialogRequest(board_id=board_id, variant=PromotionDialogVariant.VERTICAL)
    )
    assert response.promotion.variant == PromotionDialogVariant.VERTICAL
    assert (response.promotion.offset_x, response.promotion.offset_y) == (-25, -25)

    response = service.finish_promotion(ClearRequest(board_id=board_id))
    assert response.promotion is None
    assert mock_repository.get_board(board_id).promote_to is None


def test_auto_promotion_to_queen(service: BoardService, mock_repository: MockRepository) -> None:
    board_id = service.create_board(CreateBoardRequest(auto_promote_to_queen=True)).board_id
    outcome = service.request_promotion(
        PromotionRequest(board_id=board_id, source_square="b2", target_square="b1", piece="bP")
    )
    assert outcome.promoted_to == "bQ"
    assert outcome.board.promotion is None
    assert mock_repository.get_board(board_id).auto_promote_to_queen is True


def test_promotion_off_the_board(service: BoardService, board_id: UUID) -> None:
    with pytest.raises(BoardError):
        service.request_promotion(
            PromotionRequest(board_id=board_id, source_square="e8", target_square="e9", piece="wP")
        )


# --- SERVICE - DELETE ----
def test_delete_board(service: BoardService, board_id: UUID, mock_repository: MockRepository) -> None:
    service.delete_board(DeleteBoardRequest(board_id=board_id))
    assert mock_repository.get_board(board_id) is None
