from __future__ import annotations

from fastapi import APIRouter, Query

from sharpline.tasks.scan import run_scan_task

router = APIRouter(prefix="/scan", tags=["scan"])


@router.post("")
async def trigger_scan(
    hours: int | None = Query(default=None, ge=1, le=168),
    ev_min: float | None = Query(default=None, ge=0),
) -> dict:
    summary = await run_scan_task(hours=hours, ev_min=ev_min)
    return {"ok": True, "inserted": summary.picks_inserted, **summary.to_dict()}
