"""
Squares and pieces are drawn either by the built-in drawer, or by a function supplied by the caller.

Key idea: the renderer carries a tag saying which of the two it is, and `render()` dispatches on that tag
through a table (same strategy pattern as everywhere else), never by inspecting the type of what it was handed.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Optional, Self

from chessboard.board.pieces import Piece
from chessboard.board.square import Square
from chessboard.core.exceptions import InvalidRequestError
from chessboard.core.shared_types import SquareColor

VisualOutput = Any


class RendererKind(Enum):
    BUILTIN = auto()
    CUSTOM = auto()


@dataclass(frozen=True)
class RenderContext:
    """The slice of board state a renderer gets to see"""

    square: Square
    width: float
    height: float
    square_color: Optional[SquareColor] = None
    piece: Optional[Piece] = None
    is_dragging: bool = False


RenderFn = Callable[[RenderContext], VisualOutput]


@dataclass(frozen=True)
class Renderer:
    kind: RendererKind
    render_fn: Optional[RenderFn] = None

    @classmethod
    def builtin(cls) -> Self:
        return cls(RendererKind.BUILTIN)

    @classmethod
    def custom(cls, render_fn: RenderFn) -> Self:
        return cls(RendererKind.CUSTOM, render_fn)


def builtin_render(renderer: Renderer, context: RenderContext) -> VisualOutput:
    """Plain description of the element. Turning it into SVG/HTML/widgets is up to the rendering layer."""
    description: dict[str, Any] = {
        "square": context.square.to_algebraic(),
        "width": context.width,
        "height": context.height,
    }
    if context.square_color is not None:
        description["square_color"] = context.square_color.value
    if context.piece is not None:
        description["piece"] = context.piece.to_tag()
        description["is_dragging"] = context.is_dragging
    return description


def custom_render(renderer: Renderer, context: RenderContext) -> VisualOutput:
    # NOTE: the constructor does not stop anyone from creating a custom renderer without a function
    if renderer.render_fn is None:
        raise InvalidRequestError("Custom renderer has no render function.")
    return renderer.render_fn(context)


# -- STRATEGY PATTERN: ONE DRAWER PER RENDERER KIND ---
RENDER_STRATEGIES: dict[RendererKind, Callable[[Renderer, RenderContext], VisualOutput]] = {
    RendererKind.BUILTIN: builtin_render,
    RendererKind.CUSTOM: custom_render,
}


def render(renderer: Renderer, context: RenderContext) -> VisualOutput:
    return RENDER_STRATEGIES[renderer.kind](renderer, context)
