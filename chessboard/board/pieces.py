"""Defines the pieces that can be drawn on the board"""

from dataclasses import dataclass
from typing import Self

from chessboard.core.exceptions import InvalidRequestError
from chessboard.core.shared_types import PieceColor, PieceKind


@dataclass(frozen=True)
class Piece:
    color: PieceColor
    kind: PieceKind

    @classmethod
    def from_tag(cls, tag: str) -> Self:
        """Two characters: color first, then kind. ex) 'wQ' is the white queen, 'bN' a black knight"""
        if len(tag) != 2:
            raise InvalidRequestError(f"Cannot interpret {tag!r} as a piece.")
        try:
            return cls(PieceColor(tag[0]), PieceKind(tag[1]))
        except ValueError as error:
            raise InvalidRequestError(f"Cannot interpret {tag!r} as a piece.") from error

    def to_tag(self) -> str:
        return f"{self.color.value}{self.kind.value}"

    def __str__(self) -> str:
        return self.to_tag()
