from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, Float, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from sharpline.database import Base

H2H_MARKET = "h2h"


class PickStatus(str, Enum):
    UPCOMING = "upcoming"
    WON = "won"
    LOST = "lost"
    PUSH = "push"


class Pick(Base):
    __tablename__ = "picks"
    __table_args__ = (UniqueConstraint("event_id", "selection", name="uq_pick_event_selection"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    sport_key: Mapped[str] = mapped_column(String(64), index=True)
    event_id: Mapped[str] = mapped_column(String(128), index=True)
    commence_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
    home_team: Mapped[str] = mapped_column(String(128))
    away_team: Mapped[str] = mapped_column(String(128))
    selection: Mapped[str] = mapped_column(String(128))
    market: Mapped[str] = mapped_column(String(32), default=H2H_MARKET)

    fair_odds: Mapped[float | None] = mapped_column(Float, nullable=True)
    soft_odds: Mapped[float] = mapped_column(Float)
    ev_pct: Mapped[float] = mapped_column(Float)
    best_book: Mapped[str | None] = mapped_column(String(64), nullable=True)
    sharp_sources: Mapped[str] = mapped_column(String(512), default="")

    status: Mapped[str] = mapped_column(String(16), default=PickStatus.UPCOMING.value, index=True)
    home_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    away_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    resolved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
