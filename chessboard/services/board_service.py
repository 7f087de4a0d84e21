"""Orchestration of communication from API router to board logic and persistence layers (and the reverse direction)."""

import logging
from typing import Optional
from uuid import UUID

from chessboard.api.models import (
    ArrowRequest,
    ArrowResponse,
    BoardViewResponse,
    ClearRequest,
    CreateBoardRequest,
    DeleteBoardRequest,
    GetBoardRequest,
    NotationResponse,
    OrientationRequest,
    PremoveChainResponse,
    PremoveRequest,
    PremoveStepResponse,
    PromotionDialogRequest,
    PromotionOutcomeResponse,
    PromotionRequest,
    PromotionResponse,
    ResizeRequest,
    SquareResponse,
)
from chessboard.board.arrows import Arrow, ArrowSegment
from chessboard.board.classifier import LabelPlacement, label_style
from chessboard.board.pieces import Piece
from chessboard.board.premoves import PremoveChain
from chessboard.board.promotion import PromotionDialogLayout
from chessboard.board.square import BoardDimensions, Square
from chessboard.board.surface import BoardSurface, SquareView
from chessboard.core.exceptions import InvalidRequestError, RepositoryError
from chessboard.core.models import BoardModel
from chessboard.db.repository import BoardRepository

_LOGGER = logging.getLogger(__name__)

NotationStyle = dict[str, str | int | float]


class BoardService:
    """
    Orchestration of layers for a board surface.

    Every mutation follows the same steps: fetch the stored state, apply the change, store it, recompute the view.
    The view is never cached: it is derived from the stored state on every request.
    """

    def __init__(
        self,
        repository: BoardRepository,
        notation_style: NotationStyle | None = None,
    ) -> None:
        self.repo = repository
        # Passed through to the label styles as-is
        self.notation_style = notation_style or {}

    # -- API routes logic ---
    def create_board(self, request: CreateBoardRequest) -> BoardViewResponse:
        """Set up a new (empty or pre-populated) board."""
        surface = BoardSurface.new_board(
            dims=BoardDimensions(request.rows, request.columns),
            orientation=request.orientation,
            board_width=request.board_width,
            position={
                Square.from_algebraic(name): Piece.from_tag(tag)
                for name, tag in request.position.items()
            },
            premoves_allowed=request.premoves_allowed,
            promotion_dialog_variant=request.promotion_dialog_variant,
            auto_promote_to_queen=request.auto_promote_to_queen,
        )
        stored_model, board_id = self.repo.create_board(surface.to_model())
        return self._create_view_response(board_id, stored_model)

    def get_board_view(self, request: GetBoardRequest) -> BoardViewResponse:
        """Recompute everything the rendering layer needs from the stored state."""
        model = self._fetch_board(request.board_id)
        return self._create_view_response(request.board_id, model)

    def add_premove(self, request: PremoveRequest) -> BoardViewResponse:
        surface = self._load_surface(request.board_id)
        surface.add_premove(
            Square.from_algebraic(request.source_square),
            Square.from_algebraic(request.target_square),
            Piece.from_tag(request.piece),
        )
        _LOGGER.debug(
            "Board %s: premove %s %s-%s",
            request.board_id,
            request.piece,
            request.source_square,
            request.target_square,
        )
        return self._store(request.board_id, surface)

    def clear_premoves(self, request: ClearRequest) -> BoardViewResponse:
        surface = self._load_surface(request.board_id)
        surface.clear_premoves()
        return self._store(request.board_id, surface)

    def add_arrow(self, request: ArrowRequest) -> BoardViewResponse:
        """Commit an arrow (ends any drawing in progress)."""
        surface = self._load_surface(request.board_id)
        surface.add_arrow(self._arrow_from_request(request))
        return self._store(request.board_id, surface)

    def draw_arrow(self, request: ArrowRequest) -> BoardViewResponse:
        """Update the arrow being drawn. A request without squares stops the drawing."""
        surface = self._load_surface(request.board_id)
        if request.from_square is None and request.to_square is None:
            surface.draw_arrow(None)
        else:
            surface.draw_arrow(self._arrow_from_request(request))
        return self._store(request.board_id, surface)

    def clear_arrows(self, request: ClearRequest) -> BoardViewResponse:
        surface = self._load_surface(request.board_id)
        surface.clear_arrows()
        return self._store(request.board_id, surface)

    def set_orientation(self, request: OrientationRequest) -> BoardViewResponse:
        surface = self._load_surface(request.board_id)
        surface.set_orientation(request.orientation)
        return self._store(request.board_id, surface)

    def flip_board(self, request: GetBoardRequest) -> BoardViewResponse:
        surface = self._load_surface(request.board_id)
        surface.flip()
        return self._store(request.board_id, surface)

    def resize_board(self, request: ResizeRequest) -> BoardViewResponse:
        surface = self._load_surface(request.board_id)
        surface.resize(request.board_width)
        return self._store(request.board_id, surface)

    def request_promotion(self, request: PromotionRequest) -> PromotionOutcomeResponse:
        """
        A pawn reached its promotion square.
        Either the board promotes to a queen on its own (reported back), or the promotion dialog is shown in the view.
        """
        surface = self._load_surface(request.board_id)
        promoted = surface.start_promotion(
            Square.from_algebraic(request.source_square),
            Square.from_algebraic(request.target_square),
            Piece.from_tag(request.piece),
        )
        if promoted is not None:
            _LOGGER.debug("Board %s: auto-promoted to %s", request.board_id, promoted)
        return PromotionOutcomeResponse(
            board=self._store(request.board_id, surface),
            promoted_to=promoted.to_tag() if promoted is not None else None,
        )

    def finish_promotion(self, request: ClearRequest) -> BoardViewResponse:
        """Piece picked or dialog dismissed: close the dialog."""
        surface = self._load_surface(request.board_id)
        surface.finish_promotion()
        return self._store(request.board_id, surface)

    def set_promotion_dialog_variant(
        self, request: PromotionDialogRequest
    ) -> BoardViewResponse:
        surface = self._load_surface(request.board_id)
        surface.set_promotion_dialog_variant(request.variant)
        return self._store(request.board_id, surface)

    def delete_board(self, request: DeleteBoardRequest) -> None:
        """Handle a request to delete a board record."""
        self.repo.delete_board(request.board_id)

    # -- Internal helpers --
    def _fetch_board(self, board_id: UUID) -> BoardModel:
        """Attempt to find the board in the repository and raise error if it fails."""
        board_model = self.repo.get_board(board_id)
        if board_model is None:
            raise RepositoryError(f"Board with {board_id=} not found.")
        return board_model

    def _load_surface(self, board_id: UUID) -> BoardSurface:
        return BoardSurface.from_model(self._fetch_board(board_id))

    def _store(self, board_id: UUID, surface: BoardSurface) -> BoardViewResponse:
        """Persist the mutated state, then recompute the view from it."""
        stored_model = self.repo.update_board(board_id, surface.to_model())
        if stored_model is None:
            raise RepositoryError(f"Board with {board_id=} could not be updated.")
        return self._create_view_response(board_id, stored_model)

    def _arrow_from_request(self, request: ArrowRequest) -> Arrow:
        if request.from_square is None or request.to_square is None:
            raise InvalidRequestError("An arrow needs both a from_square and a to_square.")
        return Arrow(
            Square.from_algebraic(request.from_square),
            Square.from_algebraic(request.to_square),
            request.color,
        )

    def _create_view_response(
        self, board_id: UUID, model: BoardModel
    ) -> BoardViewResponse:
        """Convert the BoardModel into everything the rendering layer needs (for board with given ID)."""
        surface = BoardSurface.from_model(model)
        view = surface.view()
        return BoardViewResponse(
            board_id=board_id,
            orientation=surface.orientation,
            rows=surface.dims.rows,
            columns=surface.dims.columns,
            width=view.width,
            height=view.height,
            squares=[self._square_response(square) for square in view.squares],
            arrows=[self._arrow_response(segment) for segment in view.arrows],
            premove_chains=[self._chain_response(chain) for chain in view.chains],
            promotion=self._promotion_response(surface, view.promotion),
        )

    def _square_response(self, square_view: SquareView) -> SquareResponse:
        notation = None
        if square_view.label is not None:
            label = square_view.label
            width = square_view.size.width
            notation = NotationResponse(
                rank_label=label.rank_label,
                file_label=label.file_label,
                tone=label.tone,
                rank_style=(
                    label_style(LabelPlacement.RANK, width, self.notation_style)
                    if label.rank_label is not None
                    else None
                ),
                file_style=(
                    label_style(LabelPlacement.FILE, width, self.notation_style)
                    if label.file_label is not None
                    else None
                ),
            )
        displayed = square_view.piece
        return SquareResponse(
            square=square_view.square.to_algebraic(),
            row=square_view.row,
            col=square_view.col,
            x=square_view.coords.x,
            y=square_view.coords.y,
            width=square_view.size.width,
            height=square_view.size.height,
            color=square_view.color,
            notation=notation,
            piece=displayed.piece.to_tag() if displayed is not None else None,
            is_premoved_piece=displayed is not None and displayed.premoved,
            has_premove=square_view.has_premove,
        )

    def _arrow_response(self, segment: ArrowSegment) -> ArrowResponse:
        return ArrowResponse(
            key=segment.key,
            marker_id=segment.marker_id,
            from_square=segment.arrow.start.to_algebraic(),
            to_square=segment.arrow.end.to_algebraic(),
            x1=segment.start.x,
            y1=segment.start.y,
            x2=segment.end.x,
            y2=segment.end.y,
            shorten_by=segment.shorten_by,
            stroke_width=segment.stroke_width,
            opacity=segment.opacity,
            color=segment.color,
        )

    def _chain_response(self, chain: PremoveChain) -> PremoveChainResponse:
        return PremoveChainResponse(
            piece=chain.piece.to_tag(),
            route=[
                PremoveStepResponse(
                    source_square=step.source.to_algebraic(),
                    target_square=step.target.to_algebraic(),
                    index=step.index,
                )
                for step in chain.route
            ],
        )

    def _promotion_response(
        self, surface: BoardSurface, layout: Optional[PromotionDialogLayout]
    ) -> Optional[PromotionResponse]:
        """None while no promotion is pending"""
        if layout is None or surface.promote_from is None or surface.promote_to is None:
            return None
        return PromotionResponse(
            from_square=surface.promote_from.to_algebraic(),
            to_square=surface.promote_to.to_algebraic(),
            variant=surface.promotion_dialog_variant,
            anchor_x=layout.anchor.x,
            anchor_y=layout.anchor.y,
            offset_x=layout.offset.x,
            offset_y=layout.offset.y,
            options=[piece.to_tag() for piece in layout.options],
        )
