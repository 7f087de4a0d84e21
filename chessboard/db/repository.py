"""
Where board surfaces live between requests.

A stored board is the full interaction state of one surface as a BoardModel: dimensions, orientation, width,
position, the premove list in submission order, arrows (committed and in progress), and any pending promotion.
Views are never stored: the service recomputes them from this state on every request.
"""

from typing import Protocol
from uuid import UUID

from chessboard.core.models import BoardModel


class BoardRepository(Protocol):
    """Storage of board surface state, keyed by board id. Unknown ids give None, never an exception."""

    def get_board(self, board_id: UUID) -> BoardModel | None:
        """Independent copy of the stored state. Mutating it does not touch the record."""
        ...

    def create_board(self, board: BoardModel) -> tuple[BoardModel, UUID]:
        """Assign a fresh board id to a new surface; returns the state as stored together with that id."""
        ...

    def update_board(self, board_id: UUID, board: BoardModel) -> BoardModel | None:
        """
        Overwrite the whole surface state with the given model, no merging.
        Fields left at their defaults (no premoves, no arrow being drawn, no pending promotion) clear what was stored.
        """
        ...

    def delete_board(self, board_id: UUID) -> BoardModel | None:
        """Drop the surface; returns its last state."""
        ...
