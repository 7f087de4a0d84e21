"""
A square on the board, and the dimensions of the board it lives on

(placed in its own module as every other module needs to import it)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from string import ascii_lowercase

from chessboard.core.exceptions import InvalidDimensionsError, InvalidSquareError

# One lowercase letter per file: 'a' - 'z'
MAX_COLUMNS = len(ascii_lowercase)

# File letter, then a rank without leading zeros. ASCII digits only.
SQUARE_NAME_PATTERN = re.compile(r"[a-z][1-9][0-9]*")


@dataclass(frozen=True)
class BoardDimensions:
    rows: int
    columns: int

    def __post_init__(self) -> None:
        if self.rows < 1 or self.columns < 1:
            raise InvalidDimensionsError(
                f"Board needs at least one row and one column, got {self.rows}x{self.columns}."
            )
        if self.columns > MAX_COLUMNS:
            raise InvalidDimensionsError(
                f"Cannot name more than {MAX_COLUMNS} files, got {self.columns} columns."
            )


# Classical chess. Any other size works too, as long as files can be named by a single letter.
STANDARD_DIMENSIONS = BoardDimensions(rows=8, columns=8)


def file_letters(columns: int) -> list[str]:
    """'a', 'b', ... for each column of the board"""
    return list(ascii_lowercase[:columns])


@dataclass(frozen=True)
class Square:
    file: int
    rank: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a1' - 'h8' get converted to (1,1) - (8,8). Ranks may have more digits: 'b10' -> (2,10)"""
        if not SQUARE_NAME_PATTERN.fullmatch(sq):
            raise InvalidSquareError(f"Cannot interpret {sq!r} as a square name.")
        file = ord(sq[0]) - ord("a") + 1
        rank = int(sq[1:])
        return cls(file, rank)

    def to_algebraic(self) -> str:
        return f"{chr(self.file + ord('a') - 1)}{self.rank}"

    def is_within_bounds(self, dims: BoardDimensions = STANDARD_DIMENSIONS) -> bool:
        return (1 <= self.file <= dims.columns) and (1 <= self.rank <= dims.rows)

    def __str__(self) -> str:
        return self.to_algebraic()


def require_on_board(square: Square, dims: BoardDimensions) -> None:
    """Fail loudly instead of producing a plausible-looking coordinate for a square that does not exist."""
    if not square.is_within_bounds(dims):
        raise InvalidSquareError(
            f"Square {square.to_algebraic()!r} is not on a {dims.rows}x{dims.columns} board."
        )
