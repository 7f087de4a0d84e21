"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import JSON
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBBoard(Base):
    __tablename__ = "boards"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    rows: Mapped[int]
    columns: Mapped[int]
    orientation: Mapped[str]
    board_width: Mapped[float]
    position: Mapped[dict[str, str]] = mapped_column(JSON, default=dict)
    premoves: Mapped[list[list[str]]] = mapped_column(JSON, default=list)
    arrows: Mapped[list[list[Optional[str]]]] = mapped_column(JSON, default=list)
    new_arrow: Mapped[Optional[list[Optional[str]]]] = mapped_column(
        JSON, nullable=True
    )
    premoves_allowed: Mapped[bool] = mapped_column(default=True)
    promote_from: Mapped[Optional[str]] = mapped_column(nullable=True)
    promote_to: Mapped[Optional[str]] = mapped_column(nullable=True)
    promotion_dialog_variant: Mapped[str] = mapped_column(default="default")
    auto_promote_to_queen: Mapped[bool] = mapped_column(default=False)
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
