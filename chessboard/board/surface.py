"""
The BoardSurface is the entrypoint into the domain layer for the service layer.

It holds the board state the interaction layer owns (dimensions, orientation, position, premoves, arrows,
a pending promotion) explicitly, and `view()` runs all pure computations on a snapshot of that state. Nothing is recomputed implicitly:
the caller mutates, then asks for a fresh view.
"""

from dataclasses import dataclass, field
from typing import Optional, Self

from chessboard.board.arrows import Arrow, ArrowSegment, arrow_segments
from chessboard.board.classifier import NotationLabel, notation_label, square_color
from chessboard.board.coordinates import (
    Coords,
    SquareSize,
    board_height,
    grid_to_square,
    square_size,
    square_to_pixel,
)
from chessboard.board.pieces import Piece
from chessboard.board.premoves import (
    DisplayedPiece,
    Premove,
    PremoveChain,
    resolve_chains,
    resolve_occupancy,
    squares_with_premove,
)
from chessboard.board.promotion import PromotionDialogLayout, promotion_dialog_layout
from chessboard.board.renderers import RenderContext, Renderer, VisualOutput, render
from chessboard.board.square import (
    STANDARD_DIMENSIONS,
    BoardDimensions,
    Square,
    require_on_board,
)
from chessboard.core.exceptions import (
    InvalidBoardWidthError,
    InvalidRequestError,
    InvalidSquareError,
)
from chessboard.core.models import ArrowRecord, BoardModel
from chessboard.core.shared_types import (
    Orientation,
    PieceKind,
    PromotionDialogVariant,
    SquareColor,
)

DEFAULT_BOARD_WIDTH = 560.0


@dataclass(frozen=True)
class SquareView:
    """Everything the rendering layer needs for a single square"""

    square: Square
    row: int
    col: int
    coords: Coords
    size: SquareSize
    color: SquareColor
    label: Optional[NotationLabel]
    piece: Optional[DisplayedPiece]
    has_premove: bool


@dataclass(frozen=True)
class BoardView:
    width: float
    height: float
    squares: list[SquareView]  # row by row, top to bottom
    arrows: list[ArrowSegment]
    chains: list[PremoveChain]
    promotion: Optional[PromotionDialogLayout] = None  # only while a promotion is pending

    def square(self, square: Square) -> SquareView:
        for view in self.squares:
            if view.square == square:
                return view
        raise InvalidSquareError(f"Square {square} is not on this board.")


@dataclass
class BoardSurface:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    dims: BoardDimensions
    orientation: Orientation
    board_width: float
    position: dict[Square, Piece] = field(default_factory=dict)
    premoves: list[Premove] = field(default_factory=list)
    arrows: list[Arrow] = field(default_factory=list)
    new_arrow: Optional[Arrow] = None
    premoves_allowed: bool = True
    promote_from: Optional[Square] = None
    promote_to: Optional[Square] = None
    promotion_dialog_variant: PromotionDialogVariant = PromotionDialogVariant.DEFAULT
    auto_promote_to_queen: bool = False
    square_renderer: Renderer = field(default_factory=Renderer.builtin)
    piece_renderer: Renderer = field(default_factory=Renderer.builtin)

    def __post_init__(self) -> None:
        if self.board_width <= 0:
            raise InvalidBoardWidthError(
                f"Board width must be positive, got {self.board_width}."
            )

    @classmethod
    def new_board(
        cls,
        dims: BoardDimensions = STANDARD_DIMENSIONS,
        orientation: Orientation = Orientation.WHITE,
        board_width: float = DEFAULT_BOARD_WIDTH,
        position: Optional[dict[Square, Piece]] = None,
        premoves_allowed: bool = True,
        promotion_dialog_variant: PromotionDialogVariant = PromotionDialogVariant.DEFAULT,
        auto_promote_to_queen: bool = False,
    ) -> Self:
        """Empty board (no premoves, no arrows), optionally with pieces already placed."""
        for square in (position or {}).keys():
            require_on_board(square, dims)
        return cls(
            dims=dims,
            orientation=orientation,
            board_width=board_width,
            position=dict(position or {}),
            premoves_allowed=premoves_allowed,
            promotion_dialog_variant=promotion_dialog_variant,
            auto_promote_to_queen=auto_promote_to_queen,
        )

    @classmethod
    def from_model(cls, model: BoardModel) -> Self:
        """Define how to construct a BoardSurface from the information the Service layer actually has"""
        dims = BoardDimensions(model.rows, model.columns)
        surface = cls.new_board(
            dims=dims,
            orientation=Orientation(model.orientation),
            board_width=model.board_width,
            position={
                Square.from_algebraic(name): Piece.from_tag(tag)
                for name, tag in model.position.items()
            },
            premoves_allowed=model.premoves_allowed,
            promotion_dialog_variant=PromotionDialogVariant(model.promotion_dialog_variant),
            auto_promote_to_queen=model.auto_promote_to_queen,
        )
        for source, target, tag in model.premoves:
            surface.add_premove(
                Square.from_algebraic(source),
                Square.from_algebraic(target),
                Piece.from_tag(tag),
            )
        for record in model.arrows:
            surface.add_arrow(_arrow_from_record(record))
        if model.new_arrow is not None:
            surface.draw_arrow(_arrow_from_record(model.new_arrow))
        if model.promote_from is not None and model.promote_to is not None:
            promote_from = Square.from_algebraic(model.promote_from)
            promote_to = Square.from_algebraic(model.promote_to)
            require_on_board(promote_from, dims)
            require_on_board(promote_to, dims)
            surface.promote_from, surface.promote_to = promote_from, promote_to
        return surface

    def to_model(self) -> BoardModel:
        """Encode back into a format the Service layer uses"""
        return BoardModel(
            rows=self.dims.rows,
            columns=self.dims.columns,
            orientation=self.orientation.value,
            board_width=self.board_width,
            position={
                square.to_algebraic(): piece.to_tag()
                for square, piece in self.position.items()
            },
            premoves=[
                [p.source.to_algebraic(), p.target.to_algebraic(), p.piece.to_tag()]
                for p in self.premoves
            ],
            arrows=[_arrow_to_record(arrow) for arrow in self.arrows],
            new_arrow=(
                _arrow_to_record(self.new_arrow) if self.new_arrow is not None else None
            ),
            premoves_allowed=self.premoves_allowed,
            promote_from=_square_name(self.promote_from),
            promote_to=_square_name(self.promote_to),
            promotion_dialog_variant=self.promotion_dialog_variant.value,
            auto_promote_to_queen=self.auto_promote_to_queen,
        )

    # --- MUTATIONS (the caller asks for a new view afterwards) ---
    def add_premove(self, source: Square, target: Square, piece: Piece) -> Premove:
        require_on_board(source, self.dims)
        require_on_board(target, self.dims)
        premove = Premove(source, target, piece)
        # Resolve with the new premove before accepting it, so a cycle never ends up in the stored list
        resolve_chains([*self.premoves, premove])
        self.premoves.append(premove)
        return premove

    def clear_premoves(self) -> None:
        self.premoves.clear()

    def add_arrow(self, arrow: Arrow) -> None:
        """Commit an arrow. Also ends the drawing of an in-progress arrow."""
        require_on_board(arrow.start, self.dims)
        require_on_board(arrow.end, self.dims)
        self.arrows.append(arrow)
        self.new_arrow = None

    def draw_arrow(self, arrow: Optional[Arrow]) -> None:
        """Arrow currently being drawn by the user (None to stop drawing)."""
        if arrow is not None:
            require_on_board(arrow.start, self.dims)
            require_on_board(arrow.end, self.dims)
        self.new_arrow = arrow

    def clear_arrows(self) -> None:
        self.arrows.clear()
        self.new_arrow = None

    def set_orientation(self, orientation: Orientation) -> None:
        self.orientation = orientation

    def flip(self) -> None:
        self.orientation = (
            Orientation.BLACK
            if self.orientation == Orientation.WHITE
            else Orientation.WHITE
        )

    def resize(self, board_width: float) -> None:
        if board_width <= 0:
            raise InvalidBoardWidthError(
                f"Board width must be positive, got {board_width}."
            )
        self.board_width = board_width

    def start_promotion(
        self, source: Square, target: Square, piece: Piece
    ) -> Optional[Piece]:
        """
        A pawn reached its promotion square.
        ---

        * With auto-promotion, the pawn becomes a queen of its own color right away: that queen is returned,
          and nothing is left pending.
        * Otherwise the move is parked until the player picks a piece in the dialog. Returns None.
        """
        require_on_board(source, self.dims)
        require_on_board(target, self.dims)
        if self.auto_promote_to_queen:
            self.finish_promotion()
            return Piece(piece.color, PieceKind.QUEEN)
        self.promote_from = source
        self.promote_to = target
        return None

    def finish_promotion(self) -> None:
        """Piece picked (or the dialog was dismissed)"""
        self.promote_from = None
        self.promote_to = None

    def set_promotion_dialog_variant(self, variant: PromotionDialogVariant) -> None:
        self.promotion_dialog_variant = variant

    # --- RECOMPUTATION ---
    def view(self) -> BoardView:
        """Run every computation on the current state. Cheap enough to call after every mutation."""
        size = square_size(self.dims, self.board_width)
        displayed = resolve_occupancy(
            self.position, self.premoves, self.premoves_allowed
        )
        in_flight = squares_with_premove(self.premoves)

        squares: list[SquareView] = []
        for row in range(self.dims.rows):
            for col in range(self.dims.columns):
                square = grid_to_square(row, col, self.dims, self.orientation)
                squares.append(
                    SquareView(
                        square=square,
                        row=row,
                        col=col,
                        coords=square_to_pixel(
                            square, self.dims, self.orientation, self.board_width
                        ),
                        size=size,
                        color=square_color(row, col, self.dims, self.orientation),
                        label=notation_label(row, col, self.dims, self.orientation),
                        piece=displayed.get(square),
                        has_premove=square in in_flight,
                    )
                )

        return BoardView(
            width=self.board_width,
            height=board_height(self.dims, self.board_width),
            squares=squares,
            arrows=arrow_segments(
                self.arrows,
                self.dims,
                self.orientation,
                self.board_width,
                new_arrow=self.new_arrow,
            ),
            chains=resolve_chains(self.premoves) if self.premoves_allowed else [],
            promotion=self._promotion_layout(),
        )

    def _promotion_layout(self) -> Optional[PromotionDialogLayout]:
        if self.promote_to is None:
            return None
        return promotion_dialog_layout(
            self.promote_to,
            self.dims,
            self.orientation,
            self.board_width,
            self.promotion_dialog_variant,
        )

    def render_square(self, square_view: SquareView) -> VisualOutput:
        return render(self.square_renderer, self._render_context(square_view))

    def render_piece(
        self, square_view: SquareView, is_dragging: bool = False
    ) -> Optional[VisualOutput]:
        """None for an empty square"""
        if square_view.piece is None:
            return None
        context = self._render_context(
            square_view, square_view.piece.piece, is_dragging
        )
        return render(self.piece_renderer, context)

    def _render_context(
        self,
        square_view: SquareView,
        piece: Optional[Piece] = None,
        is_dragging: bool = False,
    ) -> RenderContext:
        return RenderContext(
            square=square_view.square,
            width=square_view.size.width,
            height=square_view.size.height,
            square_color=square_view.color,
            piece=piece,
            is_dragging=is_dragging,
        )


def _arrow_from_record(record: ArrowRecord) -> Arrow:
    start, end, *rest = record
    if start is None or end is None:
        raise InvalidRequestError(f"Incomplete arrow record: {record!r}")
    color = rest[0] if rest else None
    return Arrow(Square.from_algebraic(start), Square.from_algebraic(end), color)


def _arrow_to_record(arrow: Arrow) -> ArrowRecord:
    return [arrow.start.to_algebraic(), arrow.end.to_algebraic(), arrow.color]


def _square_name(square: Optional[Square]) -> Optional[str]:
    return square.to_algebraic() if square is not None else None
