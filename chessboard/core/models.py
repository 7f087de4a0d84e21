"""
Boundary layer data model(s).

These objects are used to communicate with the Service.
Both the API layer (higher) and domain/db layers (lower) use the model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field
from typing import Optional

# Type aliases to make BoardModel easier to read
SquareName = str
PieceTag = str
PremoveRecord = list[str]  # [source, target, piece tag]
ArrowRecord = list[Optional[str]]  # [start, end, color or None]


@dataclass
class BoardModel:
    """Transport-safe representation of a board surface used between API, Service, DB, and domain layers."""

    rows: int
    columns: int
    orientation: str
    board_width: float
    position: dict[SquareName, PieceTag] = field(default_factory=dict)
    premoves: list[PremoveRecord] = field(default_factory=list)
    arrows: list[ArrowRecord] = field(default_factory=list)
    new_arrow: Optional[ArrowRecord] = None
    premoves_allowed: bool = True
    promote_from: Optional[SquareName] = None
    promote_to: Optional[SquareName] = None
    promotion_dialog_variant: str = "default"
    auto_promote_to_queen: bool = False
