from datetime import datetime

from pydantic import BaseModel, ConfigDict


class PickResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    sport_key: str
    event_id: str
    commence_time: datetime
    home_team: str
    away_team: str
    selection: str
    market: str
    fair_odds: float | None
    soft_odds: float
    ev_pct: float
    best_book: str | None
    sharp_sources: str

    status: str
    home_score: int | None = None
    away_score: int | None = None
    created_at: datetime | None = None
    resolved_at: datetime | None = None


class PickStatsResponse(BaseModel):
    total_picks: int
    played: int
    won: int
    success_rate: float
    avg_odds: float | None
