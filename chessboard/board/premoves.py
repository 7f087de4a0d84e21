"""
Premoves: moves entered before it is the player's turn, staged until the position confirms them.

Only the *visual* consequence of the premoves is worked out here: which piece should be drawn on which square.
Legality is checked elsewhere, by whoever eventually submits the moves.

Key idea: a piece may be premoved several times in a row (e2-e4, then e4-e5). Those premoves form a chain,
and only the final square of a chain shows the piece.

Everything is recomputed from the flat list of premoves on every call: no state is kept in between.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Mapping, Sequence

from chessboard.board.pieces import Piece
from chessboard.board.square import Square
from chessboard.core.exceptions import PremoveCycleError

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Premove:
    """Its index is implicit: the position in the list of premoves in submission order."""

    source: Square
    target: Square
    piece: Piece


@dataclass(frozen=True)
class RouteStep:
    source: Square
    target: Square
    index: int


@dataclass(frozen=True)
class PremoveChain:
    """The route of a single premoved piece. Each step starts where the previous one ended."""

    piece: Piece
    route: tuple[RouteStep, ...]

    @property
    def tip(self) -> RouteStep:
        """Most recent step of the chain"""
        return self.route[-1]

    def continues_with(self, premove: Premove) -> bool:
        return self.piece == premove.piece and self.tip.target == premove.source

    def extended(self, premove: Premove, index: int) -> "PremoveChain":
        """Copy of the chain with one more step. The chain itself is left as is."""
        # Returning to a square the piece already left would make the route loop
        if any(step.source == premove.target for step in self.route):
            raise PremoveCycleError(
                f"Premove {index} ({premove.source}-{premove.target}) sends {premove.piece} back to a square its chain already left."
            )
        return PremoveChain(
            self.piece, (*self.route, RouteStep(premove.source, premove.target, index))
        )


@dataclass(frozen=True)
class PremoveOccupant:
    piece: Piece
    originating_index: int


@dataclass(frozen=True)
class DisplayedPiece:
    """What to draw on a square: either the piece of the real position, or a premoved piece."""

    piece: Piece
    premoved: bool


def resolve_chains(premoves: Sequence[Premove]) -> list[PremoveChain]:
    """
    Group premoves by the piece making them.
    ---

    Premoves are processed in submission order:
    * if the premove continues an existing chain (same piece, starting where that chain currently ends), it is appended to it.
    * otherwise it starts a new chain.
    """
    chains: list[PremoveChain] = []
    for index, premove in enumerate(premoves):
        position = next(
            (i for i, chain in enumerate(chains) if chain.continues_with(premove)),
            None,
        )
        if position is not None:
            chains[position] = chains[position].extended(premove, index)
        else:
            chains.append(
                PremoveChain(
                    piece=premove.piece,
                    route=(RouteStep(premove.source, premove.target, index),),
                )
            )
    return chains


def occupancy_from_chains(
    chains: Iterable[PremoveChain],
) -> dict[Square, PremoveOccupant]:
    """
    Where do the premoved pieces end up?
    ---

    Only the final step of a chain counts. If several chains end on the same square, the chain whose final premove
    was issued last (highest index) is displayed. That is a display priority only: it says nothing about which premove will be legal.
    """
    occupancy: dict[Square, PremoveOccupant] = {}
    for chain in chains:
        tip = chain.tip
        current = occupancy.get(tip.target)
        if current is None or tip.index > current.originating_index:
            occupancy[tip.target] = PremoveOccupant(chain.piece, tip.index)
    return occupancy


def squares_with_premove(premoves: Iterable[Premove]) -> set[Square]:
    """Squares any premove starts from or lands on. The real piece on these squares is hidden while the premoves are pending."""
    touched: set[Square] = set()
    for premove in premoves:
        touched.add(premove.source)
        touched.add(premove.target)
    return touched


def resolve_occupancy(
    position: Mapping[Square, Piece],
    premoves: Sequence[Premove],
    premoves_allowed: bool = True,
) -> dict[Square, DisplayedPiece]:
    """
    Combine the real position with the pending premoves into a single piece (at most) per square.

    * squares touched by a premove do not show their real piece.
    * final squares of the premove chains show the premoved piece.
    * all other occupied squares show the real piece.
    """
    # If premoves aren't allowed, don't waste time on calculations
    chains = resolve_chains(premoves) if premoves_allowed else []
    in_flight = squares_with_premove(premoves)

    displayed: dict[Square, DisplayedPiece] = {
        square: DisplayedPiece(piece, premoved=False)
        for square, piece in position.items()
        if square not in in_flight
    }
    for square, occupant in occupancy_from_chains(chains).items():
        displayed[square] = DisplayedPiece(occupant.piece, premoved=True)

    _LOGGER.debug(
        "Resolved %d premove(s) into %d chain(s)", len(premoves), len(chains)
    )
    return displayed
