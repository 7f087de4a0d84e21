"""Custom exceptions shared by all layers"""


class BoardError(Exception):
    """Top-level exception. Every error raised on purpose by this package derives from it."""


class InvalidSquareError(BoardError):
    """Square name cannot be parsed, or the square/grid index lies outside the board."""


class InvalidDimensionsError(BoardError):
    """Board needs at least one row and one column (and at most 26 files)."""


class InvalidBoardWidthError(BoardError):
    """Pixel width of the board must be a positive number."""


class PremoveCycleError(BoardError):
    """A premove chain would return a piece to a square it already left."""


class InvalidRequestError(BoardError, ValueError):
    """
    Request data does not pass validation.

    NOTE: also a ValueError, so pydantic wraps it in a ValidationError when raised from a validator.
    """


class RepositoryError(BoardError):
    """Record could not be found / stored."""
