"""Implementation of (Board)Repository using SQLAlchemy"""

import logging
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from chessboard.core.models import BoardModel
from chessboard.db.schema import DBBoard

_LOGGER = logging.getLogger(__name__)


class SQLBoardRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_board(self, board_id: UUID) -> BoardModel | None:
        """Get board by ID, if record exists."""
        board_db = self._fetch_board(board_id)
        if board_db:
            return self._to_model(board_db)
        return None

    def create_board(self, board: BoardModel) -> tuple[BoardModel, UUID]:
        """Store new board and return the stored data + newly created board ID."""
        new_id = uuid4()
        board_db = DBBoard(id=new_id)
        self._copy_into(board_db, board)
        self.db.add(board_db)
        self.db.commit()
        self.db.refresh(board_db)
        _LOGGER.info("Created board %s (%dx%d)", new_id, board.rows, board.columns)
        return self._to_model(board_db), new_id

    def update_board(self, board_id: UUID, board: BoardModel) -> BoardModel | None:
        """Replace the state of an existing record."""
        board_db = self._fetch_board(board_id)
        if not board_db:
            return None
        self._copy_into(board_db, board)
        self.db.commit()
        self.db.refresh(board_db)
        return self._to_model(board_db)

    def delete_board(self, board_id: UUID) -> BoardModel | None:
        """Remove a board's record."""
        board_db = self._fetch_board(board_id)
        if not board_db:
            return None
        board_model = self._to_model(board_db)
        self.db.delete(board_db)
        self.db.commit()
        _LOGGER.info("Deleted board %s", board_id)
        return board_model

    def _fetch_board(self, board_id: UUID) -> DBBoard | None:
        query = select(DBBoard).where(DBBoard.id == board_id)
        return self.db.scalar(query)

    def _copy_into(self, board_db: DBBoard, board: BoardModel) -> None:
        """
        NOTE: JSON columns only notice re-assignment, not in-place mutation.
        Copies are assigned so the ORM always sees a new object.
        """
        board_db.rows = board.rows
        board_db.columns = board.columns
        board_db.orientation = board.orientation
        board_db.board_width = board.board_width
        board_db.position = dict(board.position)
        board_db.premoves = [list(premove) for premove in board.premoves]
        board_db.arrows = [list(arrow) for arrow in board.arrows]
        board_db.new_arrow = (
            list(board.new_arrow) if board.new_arrow is not None else None
        )
        board_db.premoves_allowed = board.premoves_allowed
        board_db.promote_from = board.promote_from
        board_db.promote_to = board.promote_to
        board_db.promotion_dialog_variant = board.promotion_dialog_variant
        board_db.auto_promote_to_queen = board.auto_promote_to_queen

    def _to_model(self, board_db: DBBoard) -> BoardModel:
        """Convert SQLAlchemy model to data transfer model."""
        return BoardModel(
            rows=board_db.rows,
            columns=board_db.columns,
            orientation=board_db.orientation,
            board_width=board_db.board_width,
            position=dict(board_db.position),
            premoves=[list(premove) for premove in board_db.premoves],
            arrows=[list(arrow) for arrow in board_db.arrows],
            new_arrow=(
                list(board_db.new_arrow) if board_db.new_arrow is not None else None
            ),
            premoves_allowed=board_db.premoves_allowed,
            promote_from=board_db.promote_from,
            promote_to=board_db.promote_to,
            promotion_dialog_variant=board_db.promotion_dialog_variant,
            auto_promote_to_queen=board_db.auto_promote_to_queen,
        )
