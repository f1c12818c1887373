from __future__ import annotations

from sharpline.config import SettlementConfig
from sharpline.data_providers.odds_api import OddsAPIClient
from sharpline.database import AsyncSessionLocal
from sharpline.services.settlement_service import SettlementSummary, settle_pending


async def run_settlement_task() -> SettlementSummary:
    client = OddsAPIClient()
    async with AsyncSessionLocal() as session:
        return await settle_pending(client, session, SettlementConfig.from_settings())
