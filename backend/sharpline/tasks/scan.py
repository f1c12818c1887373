from __future__ import annotations

from sharpline.config import ScanConfig
from sharpline.data_providers.odds_api import OddsAPIClient
from sharpline.database import AsyncSessionLocal
from sharpline.services.scan_service import ScanSummary, run_scan


async def run_scan_task(hours: int | None = None, ev_min: float | None = None) -> ScanSummary:
    config = ScanConfig.from_settings(hours=hours, ev_min=ev_min)
    client = OddsAPIClient()
    async with AsyncSessionLocal() as session:
        return await run_scan(client, session, config)
