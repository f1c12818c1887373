from __future__ import annotations

from fastapi import APIRouter

from sharpline.tasks.settle import run_settlement_task

router = APIRouter(prefix="/settlement", tags=["settlement"])


@router.post("/run")
async def run_settlement() -> dict:
    summary = await run_settlement_task()
    return {"ok": True, **summary.to_dict()}
