"""
Geometry of the arrows drawn on top of the board.

An arrow runs from the center of its start square towards the center of its end square,
but stops a bit short so the arrowhead does not cover the piece on the end square.
"""

import math
from dataclasses import dataclass
from typing import Optional, Sequence

from chessboard.board.coordinates import Coords, square_center, square_size
from chessboard.board.square import BoardDimensions, Square
from chessboard.core.shared_types import Orientation

DEFAULT_ARROW_COLOR = "rgb(255,170,0)"

# Shortening of the line, as a fraction of the square width
BASE_SHORTENING_RATIO = 1 / 5
COLLISION_SHORTENING_RATIO = 1 / 3.5

STROKE_WIDTH_RATIO = 1 / 5.5
ACTIVE_STROKE_FACTOR = 0.9
COMMITTED_OPACITY = 0.65
ACTIVE_OPACITY = 0.5


@dataclass(frozen=True)
class Arrow:
    start: Square
    end: Square
    color: Optional[str] = None

    def is_degenerate(self) -> bool:
        return self.start == self.end


@dataclass(frozen=True)
class ArrowSegment:
    """Everything the rendering layer needs to draw one arrow (line + arrowhead marker)."""

    arrow: Arrow
    start: Coords
    end: Coords
    shorten_by: float
    stroke_width: float
    opacity: float
    color: str
    key: str
    marker_id: str


def collides(arrow: Arrow, existing_arrows: Sequence[Arrow]) -> bool:
    """Another arrow converges on the same end square, coming from somewhere else."""
    return any(
        other.end == arrow.end and other.start != arrow.start
        for other in existing_arrows
    )


def arrow_segment(
    arrow: Arrow,
    dims: BoardDimensions,
    orientation: Orientation,
    board_width: float,
    existing_arrows: Sequence[Arrow] = (),
    is_active_draw: bool = False,
    default_color: str = DEFAULT_ARROW_COLOR,
    marker_index: int = 0,
) -> Optional[ArrowSegment]:
    """
    Trim the line between the two square centers.
    ---

    * Degenerate arrows (start == end) are not drawn at all: returns None.
    * The end is pulled back by a fifth of a square.
    * When other arrows land on the same square, the line is pulled back further (by 1/3.5 of a square) to reduce clutter.
      The arrow that is still being drawn never gets this extra shortening.
    """
    if arrow.is_degenerate():
        return None

    square_width = square_size(dims, board_width).width
    start = square_center(arrow.start, dims, orientation, board_width)
    target = square_center(arrow.end, dims, orientation, board_width)

    shorten_by = square_width * BASE_SHORTENING_RATIO
    if not is_active_draw and collides(arrow, existing_arrows):
        shorten_by = square_width * COLLISION_SHORTENING_RATIO

    dx = target.x - start.x
    dy = target.y - start.y
    length = math.hypot(dx, dy)
    scale = (length - shorten_by) / length
    end = Coords(x=start.x + dx * scale, y=start.y + dy * scale)

    stroke_width = square_width * STROKE_WIDTH_RATIO
    if is_active_draw:
        stroke_width *= ACTIVE_STROKE_FACTOR

    key = f"{arrow.start}-{arrow.end}" + ("-active" if is_active_draw else "")
    return ArrowSegment(
        arrow=arrow,
        start=start,
        end=end,
        shorten_by=shorten_by,
        stroke_width=stroke_width,
        opacity=ACTIVE_OPACITY if is_active_draw else COMMITTED_OPACITY,
        color=arrow.color or default_color,
        key=key,
        marker_id=f"arrowhead-{marker_index}",
    )


def arrow_segments(
    arrows: Sequence[Arrow],
    dims: BoardDimensions,
    orientation: Orientation,
    board_width: float,
    new_arrow: Optional[Arrow] = None,
    default_color: str = DEFAULT_ARROW_COLOR,
) -> list[ArrowSegment]:
    """
    Segments for all committed arrows, followed by the arrow still being drawn (if any).

    Marker ids follow the position in that combined list, so they stay stable while arrows are added at the end.
    Degenerate arrows keep their position but produce no segment.
    """
    to_draw: list[tuple[Arrow, bool]] = [(arrow, False) for arrow in arrows]
    if new_arrow is not None:
        to_draw.append((new_arrow, True))

    segments: list[ArrowSegment] = []
    for marker_index, (arrow, is_active_draw) in enumerate(to_draw):
        segment = arrow_segment(
            arrow,
            dims,
            orientation,
            board_width,
            existing_arrows=arrows,
            is_active_draw=is_active_draw,
            default_color=default_color,
            marker_index=marker_index,
        )
        if segment is not None:
            segments.append(segment)
    return segments
