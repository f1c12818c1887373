from __future__ import annotations

from dataclasses import asdict, dataclass

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from sharpline.models.pick import Pick, PickStatus

TERMINAL_STATUSES = (PickStatus.WON.value, PickStatus.LOST.value, PickStatus.PUSH.value)


@dataclass
class PickStats:
    total_picks: int
    played: int
    won: int
    success_rate: float
    avg_odds: float | None


async def get_pick_stats(session: AsyncSession) -> PickStats:
    total, won, avg_odds = (
        await session.execute(
            select(
                func.count(Pick.id),
                func.sum(case((Pick.status == PickStatus.WON.value, 1), else_=0)),
                func.avg(Pick.soft_odds),
            )
        )
    ).one()
    played = int((await session.scalar(select(func.count(Pick.id)).where(Pick.status.in_(TERMINAL_STATUSES)))) or 0)
    won = int(won or 0)
    success = (won / played) * 100 if played else 0.0
    return PickStats(
        total_picks=int(total or 0),
        played=played,
        won=won,
        success_rate=round(success, 2),
        avg_odds=round(float(avg_odds), 3) if avg_odds else None,
    )


async def list_upcoming_picks(session: AsyncSession, limit: int = 500) -> list[Pick]:
    stmt = (
        select(Pick)
        .where(Pick.status == PickStatus.UPCOMING.value)
        .order_by(Pick.commence_time.asc(), Pick.id.asc())
        .limit(limit)
    )
    return list((await session.scalars(stmt)).all())


async def list_resolved_picks(session: AsyncSession, limit: int = 500) -> list[Pick]:
    stmt = (
        select(Pick)
        .where(Pick.status != PickStatus.UPCOMING.value)
        .order_by(Pick.resolved_at.desc(), Pick.id.desc())
        .limit(limit)
    )
    return list((await session.scalars(stmt)).all())


def stats_to_dict(stats: PickStats) -> dict:
    return asdict(stats)
